import numpy as np
import pandas as pd

# Marks a (items, groups) state that no partition can reach.
INFEASIBLE = np.iinfo(np.int64).max


class InvalidArgument(ValueError):
    """Raised when a partitioner is called with unusable items or group count."""


class MalformedInput(ValueError):
    """Raised when a problem cannot be read from its text form."""


def get_partitioner_dict(*modules):
    """
    Given a list of modules which have a `partition` function and
    optionally a `name` variable, return a dictionary that maps
    `name` -> module for any modules that have a `name`.

    This allows for partitioner modules to specify a standardized
    name by which they can be referenced.
    """
    partitioners = {}
    for m in modules:
        if name := getattr(m, 'name', None):
            partitioners[name] = m
    return partitioners


def get_group_maxima(dividers, items):
    """
    Given a list of divider locations and a list of items,
    return a list of the largest item in each group.
    """
    maxima = []
    for x in range(0, len(dividers) + 1):
        if x == 0:
            left_index = 0
        else:
            left_index = dividers[x - 1]
        if x == len(dividers):
            right_index = len(items)
        else:
            right_index = dividers[x]
        maxima.append(max(items[left_index:right_index]))
    return maxima


def reconstruct_partition(divider_location, num_items, num_groups):
    """
    Walk the divider table back from the full item list to recover the
    divider locations of the optimal partition.

    Args:
        divider_location (NumPy array): `divider_location[i, k]` holds the number of items
            covered by the first `k - 1` groups when `i` items are split into `k` groups.
        num_items (int): Number of items partitioned.
        num_groups (int): Number of groups.

    Returns:
        list: `num_groups - 1` ascending divider locations.
    """
    dividers = [0] * (num_groups - 1)
    for group in range(num_groups, 1, -1):
        num_items = int(divider_location[num_items, group])
        dividers[group - 2] = num_items
    return dividers


def group_generator(dividers, num_items: int):
    """
    Iterate over a list of dividers to create a series of group numbers for each item in the
    partitioned series.

    Args:
        dividers (list): A list of divider locations. Dividers are considered as
        coming before the given list index with 0-based array indexing.
        num_items (int): The number of items in the list to be partitioned.

    Returns:
        A generator yielding, for each item in the partitioned list, the
        number of the group it belongs to, starting with group 1.

    Example:
        dividers = [12, 13, 18]  # Three dividers = 4 groups
        num_items = 20

        Yields 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 2, 3, 3, 3, 3, 3, 4, 4
    """
    for group in range(1, len(dividers) + 2):
        if group == 1:
            low_item = 0
        else:
            low_item = dividers[group - 2]
        if group == len(dividers) + 1:
            high_item = num_items
        else:
            high_item = dividers[group - 1]
        for item in range(low_item, high_item):
            yield group


def get_partition_series(sizes: pd.Series, num_groups: int, partition_func):
    """
    Takes a Pandas Series of effort values and returns a Series that assigns each row to one of
    `num_groups` contiguous groups such that the sum of group maxima is minimal.

    Args:
        sizes (Series): Effort values, in order.
        num_groups (int): Number of groups to partition items into.
        partition_func (function): Partitioner function

    Returns:
        pandas.Series: Group number (1-based) for each row, indexed like `sizes`.
    """
    items = sizes.to_numpy(dtype=np.int64)
    dividers, cost = partition_func(items, num_groups)
    return pd.Series(list(group_generator(dividers, len(items))), index=sizes.index)


def partitioner(partitioner_func):
    """
    Decorates partitioner functions and ensures that parameters are valid.

    Items are handed on to the partitioner as a NumPy int64 array.

    Args:
        partitioner_func (function): function to decorate.

    Returns:
        A wrapped version of partitioner_function that validates input.
    """
    def checked_partitioner(items, num_groups, debug_info=None):
        try:
            num_items = len(items)
        except TypeError:
            raise InvalidArgument("items must be a container")
        if isinstance(num_groups, (bool, np.bool_)) or not isinstance(num_groups, (int, np.integer)):
            raise InvalidArgument(f"Number of groups must be an integer, not {num_groups!r}")
        if num_groups < 1:
            raise InvalidArgument("Must request at least one group")
        if num_groups > num_items:
            raise InvalidArgument(f"Cannot have more groups ({num_groups}) than items ({num_items})")
        items = np.asarray(items)
        # Integers too wide for int64 arrive as an object array.
        wide = items.dtype == object and all(
            isinstance(x, (int, np.integer)) and not isinstance(x, bool) for x in items.flat)
        if not wide and not np.issubdtype(items.dtype, np.integer):
            raise InvalidArgument(f"Effort values must be integers, got {items.dtype}")
        if items.min() < 0:
            raise InvalidArgument("Effort values must not be negative")
        # Every partition costs at most the sum of all items.
        total = sum(int(x) for x in items.flat)
        if total >= INFEASIBLE:
            raise InvalidArgument(f"Effort values sum to {total}, which does not fit below {INFEASIBLE}")
        return partitioner_func(items.astype(np.int64), int(num_groups), debug_info)

    checked_partitioner.__doc__ = partitioner_func.__doc__
    checked_partitioner.__name__ = partitioner_func.__name__
    return checked_partitioner


def min_group_max_sum(items, num_groups: int) -> int:
    """
    Return the minimum, over every split of `items` into `num_groups` contiguous non-empty
    groups, of the sum of each group's largest item.
    """
    from groupmax.dynamic import partition
    return partition(items, num_groups)[1]
