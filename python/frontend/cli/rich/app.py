"""Rich terminal frontend — draws connector boards and search summaries.

Everything is written to stderr so stdout only carries the answer.
"""

from __future__ import annotations

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.scoring import largest_tree
from backend.models.board import Board
from backend.models.problem import Problem
from backend.models.solution import Solution

console = Console(stderr=True)

# Box-drawing glyph for every connector mask (L=1, U=2, R=4, D=8).
_GLYPHS = " ╴╵┘╶─└┴╷┐│┤┌┬├┼"


# -- board rendering ----------------------------------------------------------


def glyph(value: int) -> str:
    return _GLYPHS[value & 15]


def render_board(board: Board) -> Table:
    """Return a Rich Table drawing every tile's connectors."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(board.size):
        table.add_column(width=1, justify="center")

    for r in range(board.size):
        cells: list[str] = []
        for c in range(board.size):
            val = board.get(r, c)
            if val == 0:
                cells.append("[dim]·[/dim]")
            else:
                cells.append(f"[bold white]{glyph(val)}[/bold white]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def show_problem(problem: Problem) -> None:
    board = problem.board
    size = board.size
    stats = Text()
    stats.append("  Tree: ", style="dim")
    stats.append(f"{largest_tree(board)}/{size * size - 1}", style="bold yellow")
    stats.append("    Move limit: ", style="dim")
    stats.append(str(problem.max_moves), style="bold yellow")

    panel = Panel(
        Group(Align.center(render_board(board)), Align.center(stats)),
        title=f"[bold cyan]Initial  {size}×{size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))


def show_solution(problem: Problem, solution: Solution) -> None:
    board = solution.board
    size = board.size
    tree = largest_tree(board)
    perfect = tree == size * size - 1

    stats = Text()
    stats.append("  Tree: ", style="dim")
    stats.append(f"{tree}/{size * size - 1}", style="bold green" if perfect else "bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(f"{len(solution.moves)}/{problem.max_moves}", style="bold yellow")
    stats.append("    Score: ", style="dim")
    stats.append(f"{solution.score:,.0f}", style="bold yellow")

    details = Text()
    for name, value in solution.stats.items():
        details.append(f"  {name}: ", style="dim")
        details.append(str(value), style="cyan")

    panel = Panel(
        Group(
            Align.center(render_board(board)),
            Align.center(stats),
            Align.center(details),
        ),
        title=f"[bold green]{solution.strategy or 'result'}  {size}×{size}[/bold green]",
        border_style="bold green" if perfect else "yellow",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))


def show_target(board: Board) -> None:
    size = board.size
    panel = Panel(
        Align.center(render_board(board)),
        title=f"[bold yellow]Target  {size}×{size}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))


def show_error(message: str) -> None:
    console.print(f"[bold red]error:[/bold red] {message}")
