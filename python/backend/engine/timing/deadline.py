"""Wall-clock budget shared by the anytime search loops."""

from __future__ import annotations

import time


class Deadline:
    """Tracks elapsed time against a fixed duration in seconds."""

    def __init__(self, duration: float) -> None:
        self.duration = max(duration, 0.0)
        self._start: float = time.perf_counter()

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self._start

    @property
    def remaining(self) -> float:
        return max(self.duration - self.elapsed, 0.0)

    @property
    def progress(self) -> float:
        """Fraction of the budget used so far, in ``[0, 1]``."""
        if self.duration <= 0.0:
            return 1.0
        return min(self.elapsed / self.duration, 1.0)

    def expired(self) -> bool:
        return self.elapsed >= self.duration

    def sub(self, seconds: float) -> Deadline:
        """Start a nested budget that never outlives this one."""
        return Deadline(min(seconds, self.remaining))
