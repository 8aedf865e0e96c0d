"""Simulated annealing over tile permutations and over move sequences."""

from __future__ import annotations

import logging
import math
import random

from backend.engine.gameplay import replay
from backend.engine.gamesolver.constructive import construct
from backend.engine.scoring import MAX_SCORE, score
from backend.engine.timing import Deadline
from backend.models.board import DIRECTIONS, Board, Direction
from backend.models.config import Schedule, SearchConfig
from backend.models.problem import Problem
from backend.models.solution import Solution

logger = logging.getLogger(__name__)

# Move-sequence perturbations.
_SWAP, _REPLACE, _DELETE, _INSERT, _APPEND, _NOOP = range(6)


def _accept(delta: float, temperature: float, rng: random.Random) -> bool:
    """Metropolis criterion."""
    if delta >= 0:
        return True
    if temperature <= 0:
        return False
    return math.exp(delta / temperature) > rng.random()


# -- permutation annealer -----------------------------------------------------


def anneal_target(
    board: Board,
    rng: random.Random,
    schedule: Schedule,
    deadline: Deadline,
    pin_empty: bool = False,
) -> Board:
    """Search raw cell permutations of *board* for a high-scoring layout.

    Reachability by legal moves is ignored.  With *pin_empty* the empty
    slot never takes part in a swap.
    """
    n = board.size
    current = board.copy()
    current_score = score(current)
    best = current
    best_score = current_score
    iterations = 0

    while best_score < MAX_SCORE and not deadline.expired():
        iterations += 1
        a = (rng.randrange(n), rng.randrange(n))
        b = (rng.randrange(n), rng.randrange(n))
        if a == b:
            continue
        if pin_empty and current.empty_pos in (a, b):
            continue
        trial = current.copy()
        trial.swap(a, b)
        if current.empty_pos in (a, b):
            trial.sync_empty()
        new_score = score(trial)
        if _accept(new_score - current_score, schedule.temperature(deadline.progress), rng):
            current = trial
            current_score = new_score
        if new_score > best_score:
            best = trial
            best_score = new_score

    logger.debug("target anneal: best=%.1f iterations=%d", best_score, iterations)
    return best.copy()


# -- move-sequence annealer ---------------------------------------------------


def anneal_moves(
    board: Board,
    moves: list[Direction],
    max_moves: int,
    rng: random.Random,
    schedule: Schedule,
    deadline: Deadline,
) -> list[Direction]:
    """Improve a move sequence by local edits, replayed from *board*.

    The first iteration scores *moves* unchanged.  Candidates containing
    an illegal move are dropped.
    """
    solution = list(moves)
    current_score = -math.inf
    best = list(moves)
    best_score = -math.inf
    iterations = 0
    first = True

    while not deadline.expired():
        iterations += 1
        candidate = solution[:]
        length = len(candidate)
        op = _NOOP if first else rng.randrange(6)
        first = False

        if op == _SWAP:
            if length < 2:
                continue
            i = rng.randrange(length)
            j = rng.randrange(length)
            candidate[i], candidate[j] = candidate[j], candidate[i]
        elif op == _REPLACE:
            if length == 0:
                continue
            candidate[rng.randrange(length)] = rng.choice(DIRECTIONS)
        elif op == _DELETE:
            if length == 0:
                continue
            del candidate[rng.randrange(length)]
        elif op == _INSERT:
            if length == 0 or length >= max_moves:
                continue
            candidate.insert(rng.randrange(length), rng.choice(DIRECTIONS))
        elif op == _APPEND:
            if length >= max_moves:
                continue
            candidate.append(rng.choice(DIRECTIONS))

        reached = replay(board, candidate)
        if reached is None:
            continue
        new_score = score(reached, len(candidate), max_moves)
        if _accept(new_score - current_score, schedule.temperature(deadline.progress), rng):
            solution = candidate
            current_score = new_score
        if new_score > best_score or (
            new_score == best_score and len(candidate) < len(best)
        ):
            best = candidate
            best_score = new_score

    logger.debug("move anneal: best=%.1f iterations=%d", best_score, iterations)
    return best


# -- two-stage driver ---------------------------------------------------------


class TwoStageSearch:
    """Anneal a target layout, construct moves to it, then refine them.

    Restarted with a fresh target until the deadline passes; the best
    replayed result wins.  Constructions longer than the move budget are
    discarded.
    """

    def __init__(self, config: SearchConfig) -> None:
        self.config = config

    def run(
        self,
        problem: Problem,
        rng: random.Random | None = None,
        deadline: Deadline | None = None,
    ) -> Solution:
        config = self.config
        rng = rng if rng is not None else config.make_rng()
        deadline = deadline if deadline is not None else Deadline(config.time_limit)
        board = problem.board
        max_moves = problem.max_moves
        n = board.size

        best = Solution(
            moves=[],
            board=board.copy(),
            score=score(board, 0, max_moves),
            strategy="annealing",
        )

        # The constructive solver wants the target's empty slot in the
        # corner, so targets are annealed with it pinned there.
        seed = board.copy()
        seed.swap(seed.empty_pos, (n - 1, n - 1))
        seed.sync_empty()

        restarts = 0
        discarded = 0
        while not deadline.expired():
            restarts += 1
            target = anneal_target(
                seed,
                rng,
                config.target_schedule,
                deadline.sub(config.target_share * config.time_limit),
                pin_empty=True,
            )
            built = construct(board, target)
            if len(built.moves) > max_moves:
                discarded += 1
                logger.debug(
                    "restart %d: %d moves exceed budget %d",
                    restarts, len(built.moves), max_moves,
                )
                continue

            moves = anneal_moves(
                board,
                built.moves,
                max_moves,
                rng,
                config.refine_schedule,
                deadline.sub(config.refine_share * config.time_limit),
            )
            reached = replay(board, moves)
            if reached is None:
                continue
            value = score(reached, len(moves), max_moves)
            logger.debug(
                "restart %d: score=%.1f moves=%d complete=%s",
                restarts, value, len(moves), built.complete,
            )
            if value > best.score:
                best = Solution(
                    moves=moves, board=reached, score=value, strategy="annealing"
                )

        best.stats = {"restarts": restarts, "discarded": discarded}
        logger.info(
            "annealing: score=%.1f moves=%d restarts=%d",
            best.score, len(best.moves), restarts,
        )
        return best


# -- move-only driver ---------------------------------------------------------


class MoveSearch:
    """Anneal a move sequence from scratch over the whole time budget."""

    def __init__(self, config: SearchConfig) -> None:
        self.config = config

    def run(
        self,
        problem: Problem,
        rng: random.Random | None = None,
        deadline: Deadline | None = None,
    ) -> Solution:
        config = self.config
        rng = rng if rng is not None else config.make_rng()
        deadline = deadline if deadline is not None else Deadline(config.time_limit)
        board = problem.board

        moves = anneal_moves(
            board, [], problem.max_moves, rng, config.refine_schedule, deadline
        )
        reached = replay(board, moves)
        value = score(reached, len(moves), problem.max_moves)
        logger.info("moves: score=%.1f moves=%d", value, len(moves))
        return Solution(
            moves=moves,
            board=reached,
            score=value,
            strategy="moves",
            stats={"elapsed": round(deadline.elapsed, 3)},
        )
