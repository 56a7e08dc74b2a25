import re
import sys
from time import time

import click

from groupmax import InvalidArgument, MalformedInput, get_group_maxima, get_partitioner_dict

import groupmax.dynamic
import groupmax.dynamic_numba
import groupmax.dynamic_numpy
import groupmax.enumerate

partitioners = get_partitioner_dict(
    groupmax.enumerate,
    groupmax.dynamic,
    groupmax.dynamic_numba,
    groupmax.dynamic_numpy,
)

INTEGER_TOKEN = re.compile(r'[+-]?\d+', re.ASCII)
SET_ELEMENT = re.compile(r'(\d+)(?:-(\d+))?(?::(\d+))?', re.ASCII)


def parse_set_spec(spec: str, substitute: dict = None) -> list:
    """
    Parse a comma-separated set of counts such as "2,5-8,10-30:10" into a sorted list.

    Names in `substitute` are replaced by their values first, so "2-n" can mean "2 up to n".
    """
    for variable, value in (substitute or {}).items():
        spec = spec.replace(variable, str(value))
    counts = set()
    for element in spec.split(','):
        match = SET_ELEMENT.fullmatch(element.strip())
        if match is None:
            raise ValueError(f'Could not interpret set specification "{element}"')
        low, high, step = match.groups()
        if step is not None and high is None:
            raise ValueError(f'A step needs a range. Cannot parse "{element}"')
        high = low if high is None else high
        counts.update(range(int(low), int(high) + 1, int(step or 1)))
    return sorted(counts)


def parse_problem(text: str):
    """
    Read a problem in its whitespace-separated form: the number of items N, then N effort
    values, then the number of groups K. Anything after K is ignored.

    Returns:
        (list, int): The effort values and the number of groups.
    """
    tokens = text.split()

    def read_int(position, what):
        if position >= len(tokens):
            raise MalformedInput(f'Expected {what} but input ended after {len(tokens)} tokens')
        if not INTEGER_TOKEN.fullmatch(tokens[position]):
            raise MalformedInput(f'Expected {what} but found "{tokens[position]}"')
        return int(tokens[position])

    num_items = read_int(0, 'the number of items')
    if num_items < 0:
        raise MalformedInput(f'The number of items cannot be negative, got {num_items}')
    items = [read_int(1 + x, f'effort value {x + 1} of {num_items}') for x in range(num_items)]
    num_groups = read_int(num_items + 1, 'the number of groups')
    return items, num_groups


@click.command()
@click.argument('problem', type=click.File('r'), default='-')
@click.option('-i', '--implementation', type=click.Choice(sorted(partitioners)), default='dynamic',
              help='Use the named partitioner implementation. Defaults to "dynamic".')
@click.option('-t', '--timing/--no-timing', default=False, help='Print partitioner timing information to stderr')
@click.option('-g', '--show-groups/--no-show-groups', default=False,
              help='Print the chosen divider locations and group maxima to stderr.')
def cli(problem, implementation, timing, show_groups):
    """
    Read N, N effort values and a number of groups K from PROBLEM (standard input by default), split
    the efforts into K contiguous groups, and print the smallest possible sum of the largest effort
    in each group.

    > echo "3 10 20 30 2" | groupmax
    40
    """
    try:
        items, num_groups = parse_problem(problem.read())
        start = time()
        dividers, cost = partitioners[implementation].partition(items, num_groups)
        end = time()
    except (InvalidArgument, MalformedInput) as e:
        raise click.ClickException(str(e))

    if timing:
        click.echo(f"Executed in {end-start} seconds.", err=True)
    if show_groups:
        click.echo(f"Dividers: {list(dividers)}", err=True)
        click.echo(f"Group maxima: {get_group_maxima(dividers, items)}", err=True)
    click.echo(cost)


if __name__ == '__main__':
    cli(sys.argv[1:])
