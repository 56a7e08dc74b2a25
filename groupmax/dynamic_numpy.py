"""
dynamic_numpy implements the groupmax partitioner API with NumPy array operations,
keeping only two rows of the cost table at a time.
"""
import numpy as np

from groupmax import INFEASIBLE, partitioner, reconstruct_partition

name = 'dynamic_numpy'


def get_min_cost(items, group, previous_row):
    """
    Given the cost row for `group - 1` groups, return the cost row and divider row for `group` groups.
    """
    current_row_cost = np.full(previous_row.shape, INFEASIBLE, dtype=np.int64)
    current_row_dividers = np.zeros(previous_row.shape, dtype=np.int64)
    for item in range(group, len(previous_row)):
        # Candidates run from the shortest last group to the longest.
        running_max = np.maximum.accumulate(items[group - 1:item][::-1])
        previous = previous_row[group - 1:item][::-1]
        feasible = np.flatnonzero(previous != INFEASIBLE)
        if not len(feasible):
            continue
        cost = previous[feasible] + running_max[feasible]
        best = np.argmin(cost)
        current_row_cost[item] = cost[best]
        current_row_dividers[item] = item - 1 - feasible[best]
    return current_row_cost, current_row_dividers


def build_matrices(items, num_groups, divider_location):
    row = np.full(len(items) + 1, INFEASIBLE, dtype=np.int64)
    row[0] = 0
    for group in range(1, num_groups + 1):
        row, divider_location[:, group] = get_min_cost(items, group, row)
    return row, divider_location


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

    divider_location = np.zeros((num_items + 1, num_groups + 1), dtype=np.int64)
    last_row, divider_location = build_matrices(items, num_groups, divider_location)

    if debug_info is not None:
        debug_info['items'] = items
        debug_info['last_row'] = last_row
        debug_info['divider_location'] = divider_location

    if last_row[num_items] == INFEASIBLE:
        raise RuntimeError(f"No partition of {num_items} items into {num_groups} groups was found")

    dividers = reconstruct_partition(divider_location, num_items, num_groups)
    return dividers, int(last_row[num_items])
