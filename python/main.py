#!/usr/bin/env python3
"""Tree Slide — grow the largest connector tree on a sliding-tile board.

Usage::

    python main.py solve problem.txt              # move string on stdout
    python main.py solve -s beam -t 5 --show      # read stdin, draw boards
    python main.py solve -s moves -t 10           # anneal moves from scratch
    python main.py solve -s target -o grid        # best layout, ignoring moves
    python main.py generate 6 --seed 3            # random problem
"""

import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import BoardGenerator  # noqa: E402
from backend.engine.gameplay import replay  # noqa: E402
from backend.engine.gamesolver import Solver, Strategy  # noqa: E402
from backend.models import BoardError, SearchConfig, parse_problem  # noqa: E402
from frontend.cli.rich import app as ui  # noqa: E402

logger = logging.getLogger("treeslide")


# -- option enums -------------------------------------------------------------


class Mode(StrEnum):
    annealing = "annealing"
    beam = "beam"
    moves = "moves"
    target = "target"


class Output(StrEnum):
    moves = "moves"
    grid = "grid"


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=ui.console, show_path=False)],
    )


def _read_text(path: Optional[Path]) -> str:
    if path is None:
        return sys.stdin.read()
    return path.read_text()


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def solve(
    path: Optional[Path] = typer.Argument(
        None, exists=True, dir_okay=False,
        help="Problem file. Reads stdin when omitted.",
    ),
    strategy: Mode = typer.Option(
        Mode.annealing, "-s", "--strategy",
        help="Search strategy.",
    ),
    output: Output = typer.Option(
        Output.moves, "-o", "--output",
        help="Print the move string or the resulting grid.",
    ),
    time_limit: float = typer.Option(
        2.9, "-t", "--time-limit",
        min=0.0,
        help="Wall-clock budget in seconds.",
    ),
    seed: int = typer.Option(0, "--seed", help="Random seed."),
    beam_width: Optional[int] = typer.Option(
        None, "--beam-width",
        min=1,
        help="Override the beam width for this board size.",
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Draw the boards on stderr.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging."),
) -> None:
    """Search for the largest tree reachable within the move limit."""
    _setup_logging(verbose)
    try:
        problem = parse_problem(_read_text(path))
    except BoardError as exc:
        ui.show_error(str(exc))
        raise typer.Exit(code=1)

    config = SearchConfig(seed=seed, time_limit=time_limit)
    if beam_width is not None:
        config.beam_widths[problem.size] = beam_width
    if show:
        ui.show_problem(problem)

    if strategy is Mode.target:
        board = Solver.target(problem, config)
        if show:
            ui.show_target(board)
        if output is Output.moves:
            ui.show_error("the target strategy only produces a grid; use -o grid")
            raise typer.Exit(code=2)
        print("\n".join(board.to_hex_rows()))
        return

    solution = Solver.solve(problem, Strategy(strategy.value), config)
    if replay(problem.board, solution.moves) is None:
        # every strategy replays its moves; this would be a bug
        logger.error("solution contains an illegal move")
        raise typer.Exit(code=3)
    if show:
        ui.show_solution(problem, solution)

    if output is Output.grid:
        print("\n".join(solution.board.to_hex_rows()))
    else:
        print(solution.to_string())


@app.command()
def generate(
    size: int = typer.Argument(..., min=2, max=16, help="Board size."),
    seed: int = typer.Option(0, "--seed", help="Random seed."),
    max_moves: Optional[int] = typer.Option(
        None, "--max-moves",
        min=0,
        help="Move limit (default 2·N³).",
    ),
) -> None:
    """Print a random problem whose perfect tree is reachable."""
    rng = SearchConfig(seed=seed).make_rng()
    problem = BoardGenerator.generate(size, rng, max_moves=max_moves)
    sys.stdout.write(problem.to_text())


if __name__ == "__main__":
    app()
