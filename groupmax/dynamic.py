import numpy as np

from groupmax import INFEASIBLE, partitioner, reconstruct_partition

name = 'dynamic'


def init_matrices(num_items, num_groups):
    min_cost = np.full((num_items + 1, num_groups + 1), INFEASIBLE, dtype=np.int64)
    divider_location = np.zeros((num_items + 1, num_groups + 1), dtype=np.int64)
    # Zero groups cover zero items at no cost.
    min_cost[0, 0] = 0
    return min_cost, divider_location


# noinspection DuplicatedCode
def build_matrices(items, min_cost, divider_location):
    num_items = min_cost.shape[0] - 1
    for group in range(1, min_cost.shape[1]):
        for item in range(group, num_items + 1):
            running_max = 0
            best_cost = INFEASIBLE
            best_divider = 0
            # The last group spans items[first - 1:item]
            for first in range(item, group - 1, -1):
                running_max = max(running_max, int(items[first - 1]))
                previous = min_cost[first - 1, group - 1]
                if previous == INFEASIBLE:
                    continue
                cost = int(previous) + running_max
                if cost < best_cost:
                    best_cost = cost
                    best_divider = first - 1
            min_cost[item, group] = best_cost
            divider_location[item, group] = best_divider

    return min_cost, divider_location


@partitioner
def partition(items, num_groups: int, debug_info: dict = None):
    """
    Implements a groupmax.partitioner-compliant partitioner.

    Args:
        items (iterable): Non-negative integer effort values, in order.
        num_groups (int): Number of contiguous groups to split items into.
        debug_info: A dictionary to be populated with debugging information.

    Returns:
        dividers (list): Divider locations splitting items into `num_groups` groups such that
            the sum of the group maxima is minimized.
        cost (int): The resulting sum of group maxima.
    """
    num_items = len(items)
    if num_groups == num_items:
        return list(range(1, num_items)), int(items.sum())
    if num_groups == 1:
        return [], int(items.max())

    min_cost, divider_location = init_matrices(num_items, num_groups)
    build_matrices(items, min_cost, divider_location)

    if debug_info is not None:
        debug_info['items'] = items
        debug_info['min_cost'] = min_cost
        debug_info['divider_location'] = divider_location

    if min_cost[num_items, num_groups] == INFEASIBLE:
        raise RuntimeError(f"No partition of {num_items} items into {num_groups} groups was found")

    dividers = reconstruct_partition(divider_location, num_items, num_groups)
    return dividers, int(min_cost[num_items, num_groups])
