"""Tuning knobs for the search strategies.

Every strategy receives a :class:`SearchConfig` explicitly; nothing here
is read as module-level state at search time.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Schedule:
    """Linear annealing temperature schedule."""

    start_temp: float
    end_temp: float

    def temperature(self, progress: float) -> float:
        progress = min(max(progress, 0.0), 1.0)
        return self.start_temp + (self.end_temp - self.start_temp) * progress


def _default_beam_widths() -> dict[int, int]:
    return {2: 1000, 3: 1000, 4: 600, 5: 400, 6: 340, 7: 170, 8: 95, 9: 69, 10: 45}


@dataclass
class SearchConfig:
    seed: int = 0
    time_limit: float = 2.9

    # -- annealing ------------------------------------------------------------
    target_schedule: Schedule = Schedule(200.0, 5.0)
    refine_schedule: Schedule = Schedule(2000.0, 5.0)
    target_share: float = 0.1
    refine_share: float = 0.3

    # -- beam search ----------------------------------------------------------
    beam_widths: dict[int, int] = field(default_factory=_default_beam_widths)
    default_beam_width: int = 30
    jitter: float = 1000.0
    boundary_penalty: float = 1000.0

    def beam_width(self, size: int) -> int:
        return self.beam_widths.get(size, self.default_beam_width)

    def make_rng(self) -> random.Random:
        """Return a fresh generator seeded with :attr:`seed`."""
        return random.Random(self.seed)
