"""Command-line entry point."""

from __future__ import annotations

from typer.testing import CliRunner

from backend.models.problem import parse_problem
from main import app

runner = CliRunner()

_PROBLEM = "3 10\ncd9\naa2\n202\n"


def test_generate_prints_problem() -> None:
    result = runner.invoke(app, ["generate", "4", "--seed", "3"])
    assert result.exit_code == 0
    problem = parse_problem(result.stdout)
    assert problem.size == 4
    assert problem.max_moves == 128


def test_solve_prints_moves(tmp_path) -> None:
    path = tmp_path / "problem.txt"
    path.write_text(_PROBLEM)
    result = runner.invoke(app, ["solve", str(path), "-s", "beam", "-t", "0.3"])
    assert result.exit_code == 0
    moves = result.stdout.strip()
    assert len(moves) <= 10
    assert set(moves) <= set("LURD")


def test_solve_reads_stdin_and_prints_grid() -> None:
    result = runner.invoke(
        app, ["solve", "-t", "0.3", "-o", "grid"], input=_PROBLEM
    )
    assert result.exit_code == 0
    rows = result.stdout.split()
    assert len(rows) == 3
    assert sorted("".join(rows)) == sorted("cd9aa2202")


def test_target_strategy_needs_grid_output() -> None:
    result = runner.invoke(app, ["solve", "-s", "target", "-t", "0.2"], input=_PROBLEM)
    assert result.exit_code == 2


def test_malformed_problem_exits_with_error() -> None:
    result = runner.invoke(app, ["solve", "-t", "0.1"], input="3 10\ncd9\naa2\n")
    assert result.exit_code == 1


def test_moves_strategy_prints_legal_moves() -> None:
    result = runner.invoke(app, ["solve", "-s", "moves", "-t", "0.3"], input=_PROBLEM)
    assert result.exit_code == 0
    moves = result.stdout.strip()
    assert len(moves) <= 10
    assert set(moves) <= set("LURD")
