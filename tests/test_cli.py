import click.testing
import pytest

from groupmax import MalformedInput
from groupmax.cli import cli, parse_problem, parse_set_spec


def run(stdin, *args):
    runner = click.testing.CliRunner()
    return runner.invoke(cli, list(args), input=stdin)


@pytest.mark.parametrize("stdin, expected", [
    ("5\n1 2 3 4 5\n5\n", "15\n"),
    ("5\n1 2 3 4 5\n1\n", "5\n"),
    ("3\n10 20 30\n2\n", "40\n"),
    ("4 4 4 4 4 2", "8\n"),
    ("5\n5 1 5 1 5\n3\n", "11\n"),
])
def test_main_succeeds(stdin, expected):
    result = run(stdin)
    assert result.exit_code == 0
    assert result.output == expected


@pytest.mark.parametrize("implementation", ['dynamic', 'dynamic_numpy', 'dynamic_numba', 'enumerate'])
def test_implementations(implementation):
    result = run("6\n3 1 4 1 5 9\n3\n", '-i', implementation)
    assert result.exit_code == 0
    assert result.output == "13\n"


def test_unknown_implementation():
    result = run("3\n10 20 30\n2\n", '-i', 'cuda')
    assert result.exit_code == 2


def test_show_groups_and_timing_go_to_stderr():
    runner = click.testing.CliRunner()
    result = runner.invoke(cli, ['--show-groups', '--timing'], input="3\n10 20 30\n2\n")
    assert result.exit_code == 0
    assert result.stdout == "40\n"
    assert "Dividers: [1]" in result.stderr
    assert "Group maxima: [10, 30]" in result.stderr
    assert "Executed in" in result.stderr


@pytest.mark.parametrize("stdin", ["3\n1 2 3\n0\n", "3\n1 2 3\n4\n", "3\n1 -2 3\n2\n"])
def test_invalid_argument_fails(stdin):
    result = run(stdin)
    assert result.exit_code == 1
    assert "Error:" in result.output


@pytest.mark.parametrize("stdin", ["", "3\n1 2\n", "3\n1 2 3\n", "3\n1 x 3\n2\n", "-1\n1\n",
                                   "2\n1_000 5\n1\n", "2\n\u0662 5\n1\n", "2\n1.0 5\n1\n"])
def test_malformed_input_fails(stdin):
    result = run(stdin)
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_parse_problem():
    assert parse_problem("3\n10 20 30\n2\n") == ([10, 20, 30], 2)
    assert parse_problem("  2 7 8\t1 trailing tokens ignored") == ([7, 8], 1)
    with pytest.raises(MalformedInput):
        parse_problem("2 7")
    assert parse_problem("2 +7 8 1") == ([7, 8], 1)
    with pytest.raises(MalformedInput):
        parse_problem("two 7 8 1")
    with pytest.raises(MalformedInput):
        parse_problem("2 7 1_000 1")


def test_parse_set_spec():
    assert parse_set_spec('1,3,5-7') == [1, 3, 5, 6, 7]
    assert parse_set_spec('10-20:5,2') == [2, 10, 15, 20]
    assert parse_set_spec('n', {'n': 12}) == [12]
    assert parse_set_spec('2-n', {'n': 4}) == [2, 3, 4]
    with pytest.raises(ValueError):
        parse_set_spec('5:2')
    with pytest.raises(ValueError):
        parse_set_spec('a-b')


def test_efforts_too_large_to_sum():
    result = run("2\n4611686018427387904 4611686018427387904\n2\n")
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_largest_summable_efforts():
    result = run("2\n4611686018427387903 4611686018427387903\n2\n")
    assert result.exit_code == 0
    assert result.output == "9223372036854775806\n"


def test_reads_problem_file(tmp_path):
    problem = tmp_path / 'problem.txt'
    problem.write_text("5\n5 1 5 1 5\n3\n")
    runner = click.testing.CliRunner()
    result = runner.invoke(cli, [str(problem), '-i', 'dynamic_numpy'])
    assert result.exit_code == 0
    assert result.output == "11\n"
