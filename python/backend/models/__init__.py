from backend.models.board import DIRECTIONS, Board, BoardError, Direction
from backend.models.config import SearchConfig, Schedule
from backend.models.problem import Problem, ProblemError, parse_problem
from backend.models.solution import Solution

__all__ = [
    "DIRECTIONS",
    "Board",
    "BoardError",
    "Direction",
    "Problem",
    "ProblemError",
    "Schedule",
    "SearchConfig",
    "Solution",
    "parse_problem",
]
