import pandas as pd

from groupmax import get_group_maxima, partitioner

name = 'enumerate'


def partition_generator(num_items: int, num_groups: int):
    """
    Given a number of items `num_items` and a number of groups `num_groups`, enumerate lists of all the possible
    combinations of divider locations that partition `num_items` into `num_groups`.

    The strategy is to start at the enumeration that has each divider in its left-most possible location, and then
    iterate all possible locations of the last (right-most) divider before incrementing the next-to-last and again
    iterating all possible locations of the last divider.

    When there are no more valid locations for a divider, the previous divider is incremented and every divider after
    it is reset to the left-most location following it, until all dividers are in their right-most locations.
    """
    num_dividers = num_groups - 1
    if num_dividers == 0:
        yield []
        return

    dividers = list(range(1, num_dividers + 1))  # Start with the first valid partition.
    while True:
        yield list(dividers)
        current_divider = num_dividers - 1
        # Right-most location the current divider may take and still leave room for the rest.
        while current_divider >= 0 and dividers[current_divider] == num_items - num_dividers + current_divider:
            current_divider -= 1
        if current_divider < 0:
            return
        dividers[current_divider] += 1
        for later in range(current_divider + 1, num_dividers):
            dividers[later] = dividers[later - 1] + 1


@partitioner
def partition(items, num_groups, debug_info=None):
    """
    Given an ordered list of items and number of groups, return a list of divider locations
    that partitions the list in such a way as to minimize the sum of the largest item in each group.

    This function operates by generating all possible partitionings and calculating the cost
    for each. It will not complete in a reasonable amount of time for large numbers of items or groups,
    and is intended to test the correctness of other algorithms.

    It is written for clarity rather than performance.
    """
    items = list(items)
    df = pd.DataFrame(pd.Series(list(partition_generator(len(items), num_groups)), name='dividers'))
    df['group_maxima'] = df['dividers'].apply(get_group_maxima, items=items)
    df['cost'] = df['group_maxima'].apply(sum)
    best = df[df.cost == df.cost.min()].iloc[0]
    if debug_info is not None:
        debug_info['df'] = df
    return list(best['dividers']), int(best['cost'])
