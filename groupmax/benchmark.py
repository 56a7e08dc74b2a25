"""
groupbench times partitioners against each other and checks that every one of them reaches the same cost
on the same effort values.
"""
import re
import sys
import time

import click
import numpy as np
import pandas as pd

from groupmax.cli import partitioners, parse_set_spec

REPORT_COLUMNS = ('partitioner', 'num_items', 'num_groups', 'iteration', 'cost', 'elapsed_seconds', 'dividers',
                  'items')


def run_partitioners(partitioner_list: list, items: np.ndarray, num_groups: int) -> list:
    """
    Partition the same items with each named partitioner, returning one record per partitioner.
    """
    records = []
    for p in partitioner_list:
        start = time.perf_counter()
        dividers, cost = partitioners[p].partition(items, num_groups)
        records.append({
            'partitioner': p,
            'cost': cost,
            'elapsed_seconds': time.perf_counter() - start,
            'dividers': list(dividers),
        })
    return records


def benchmark(partitioner_list: list, item_list: list, group_list: list, iterations: int = 1,
              begin_range: int = 1, end_range: int = 10, specified_items_sizes: np.ndarray = None) -> pd.DataFrame:
    """
    Run every partitioner on every valid (item count, group count) pair.

    Each iteration draws fresh efforts uniformly from [begin_range, end_range], or takes the first
    `num_items` values of `specified_items_sizes` when it is given. Pairs with more groups than items
    are skipped.
    """
    rows = []
    for num_items in item_list:
        for num_groups in (g for g in group_list if g <= num_items):
            for iteration in range(1, iterations + 1):
                if specified_items_sizes is None:
                    items = np.random.randint(begin_range, end_range + 1, size=num_items)
                else:
                    items = np.asarray(specified_items_sizes[:num_items])
                for record in run_partitioners(partitioner_list, items, num_groups):
                    record.update(num_items=num_items, num_groups=num_groups, iteration=iteration,
                                  items=items.tolist())
                    rows.append(record)
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def find_disagreements(r: pd.DataFrame) -> pd.DataFrame:
    """
    Rows whose cost is above the best cost any partitioner found for the same items and group count.
    """
    best = r.groupby(['num_items', 'num_groups', 'iteration']).cost.transform('min')
    return r[r.cost != best]


def timing_table(r: pd.DataFrame, partitioner: str) -> pd.DataFrame:
    """Mean milliseconds per call, one row per item count and one column per group count."""
    runs = r[r.partitioner == partitioner]
    return pd.pivot_table(runs, values='elapsed_seconds', index='num_items', columns='num_groups',
                          aggfunc='mean') * 1000


def echo_tables(partitioner_list: list, r: pd.DataFrame):
    for p in partitioner_list:
        grid = timing_table(r, p)
        click.echo(f'Partitioner: {p} (ms)')
        click.echo(f'{"items":>8}' + ''.join(f'{g:>10}' for g in grid.columns))
        for num_items, row in grid.iterrows():
            click.echo(f'{num_items:>8}' + ''.join(f'{ms:>10.2f}' for ms in row))
        click.echo()


def get_sizes_from(sizes_from: str) -> np.ndarray:
    """
    Read effort values from a one-column CSV or JSON file, or CSV on stdin when `sizes_from` is "-".
    """
    if sizes_from.lower().endswith('.json'):
        frame = pd.read_json(sizes_from, orient='records')
    else:
        frame = pd.read_csv(sys.stdin if sizes_from == '-' else sizes_from)
    if len(frame.columns) != 1:
        raise ValueError(f'--sizes-from needs exactly one column of effort values, '
                         f'found {len(frame.columns)}: {", ".join(map(str, frame.columns))}')
    column = frame[frame.columns[0]]
    if not pd.api.types.is_integer_dtype(column):
        raise ValueError(f'--sizes-from needs integer effort values, found {column.dtype}')
    return column.to_numpy(dtype=np.int64)


def write_report(r: pd.DataFrame, report: str):
    if report.lower().endswith('.json'):
        r.to_json(report, orient='records')
    else:
        r.to_csv(sys.stdout if report == '-' else report, index=False)


@click.command()
@click.argument('partitioner_types', type=str, required=True)
@click.argument('item_spec', type=str, default="15")
@click.argument('group_spec', type=str, default="8")
@click.argument('iterations', type=int, default=1)
@click.argument('size_spec', type=str, default='1-10')
@click.option('--force-jit/--no-force-jit', default=True,
              help='Compile the Numba partitioner before timing it.')
@click.option('--report', type=click.Path(writable=True, allow_dash=True), default=None,
              help='Write every run to this CSV or JSON file, or CSV on stdout with "-".')
@click.option('--sizes-from', type=click.Path(exists=True, allow_dash=True), default=None,
              help='Use effort values from a one-column file instead of random ones. '
                   '"n" in ITEM_SPEC stands for their count.')
@click.option('--tables/--no-tables', default=False, help='Print a timing table for each partitioner.')
@click.option('--verbose/--no-verbose', default=False, help='Print each partitioner\'s mean cost and time.')
def cli(partitioner_types, item_spec, group_spec, iterations, size_spec,
        force_jit, report, sizes_from, tables, verbose):
    """
    Groupbench runs groupmax partitioners side by side, reports how long each took, and fails if any
    of them found a worse sum of group maxima than the others on the same efforts.

    > groupbench dynamic,dynamic_numba 10-50:10 2-5 3 --tables
    """
    partitioner_list = partitioner_types.split(',')
    unknown = sorted(set(partitioner_list) - set(partitioners))
    if unknown:
        raise click.BadParameter(f'Unknown partitioner(s): {", ".join(unknown)}', param_hint='PARTITIONER_TYPES')
    match = re.fullmatch(r'(\d+)-(\d+)', size_spec)
    if match is None:
        raise click.BadParameter('Give two numbers separated by a dash, e.g. 1-10', param_hint='SIZE_SPEC')
    begin_range, end_range = sorted(map(int, match.groups()))

    specified_items_sizes = None
    substitute = {}
    if sizes_from is not None:
        specified_items_sizes = get_sizes_from(sizes_from)
        substitute['n'] = len(specified_items_sizes)
    item_list = parse_set_spec(item_spec, substitute)
    group_list = parse_set_spec(group_spec)

    if force_jit and 'dynamic_numba' in partitioner_list:
        partitioners['dynamic_numba'].precompile()

    r = benchmark(partitioner_list, item_list, group_list, iterations, begin_range, end_range,
                  specified_items_sizes)

    if verbose:
        summary = r.groupby(['num_items', 'num_groups', 'partitioner'])[['cost', 'elapsed_seconds']].mean()
        for (num_items, num_groups, p), record in summary.iterrows():
            click.echo(f'{num_items} items, {num_groups} groups, {p}: mean cost {record.cost:.1f}, '
                       f'{record.elapsed_seconds * 1000:.2f} ms', err=True)
    if tables:
        echo_tables(partitioner_list, r)
    if report is not None:
        write_report(r, report)

    wrong = find_disagreements(r)
    if not wrong.empty:
        for record in wrong.itertuples():
            click.echo(f'{record.partitioner} found cost {record.cost} for {record.items} '
                       f'in {record.num_groups} groups', err=True)
        raise click.ClickException(f'{len(wrong)} run(s) missed the best cost')


if __name__ == '__main__':
    cli(sys.argv[1:])
