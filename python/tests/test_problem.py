"""Problem parsing and formatting."""

from __future__ import annotations

import pytest

from backend.models.problem import Problem, ProblemError, parse_problem
from backend.models.solution import Solution
from backend.models.board import Board, Direction


def test_parse_problem() -> None:
    problem = parse_problem("3 10\ncd9\naa2\n220\n")
    assert problem.size == 3
    assert problem.max_moves == 10
    assert problem.board.empty_pos == (2, 2)
    assert problem.board.cells == [12, 13, 9, 10, 10, 2, 2, 2, 0]


def test_parse_tolerates_extra_whitespace() -> None:
    problem = parse_problem("  2   4\r\n c1 \n\n20")
    assert problem.board.to_hex_rows() == ["c1", "20"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "3",
        "x 10\ncd9\naa2\n220",
        "3 -1\ncd9\naa2\n220",
        "3 10\ncd9\naa2",
        "3 10\ncd9\naa2\n2200",
        "3 10\ncd9\naa2\n2g0",
        "3 10\ncd0\naa2\n220",
        "3 10\ncd9\naa2\n222",
    ],
    ids=[
        "empty",
        "no-limit",
        "bad-header",
        "negative-limit",
        "missing-row",
        "long-row",
        "not-hex",
        "two-empty",
        "no-empty",
    ],
)
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(ProblemError):
        parse_problem(text)


def test_to_text_matches_input_format() -> None:
    text = "3 10\ncd9\naa2\n220\n"
    assert parse_problem(text).to_text() == text


def test_solution_string() -> None:
    board = Board.from_hex_rows(["c1", "20"])
    solution = Solution(
        moves=[Direction.UP, Direction.LEFT, Direction.DOWN],
        board=board,
        score=0.0,
    )
    assert solution.to_string() == "ULD"
    assert len(solution) == 3
    assert Problem(board=board, max_moves=5).size == 2
