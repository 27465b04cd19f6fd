"""Smoothing utilities for gesture labels and control values."""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Sequence
from typing import Generic, TypeVar

# Number of raw labels kept for the majority vote
VOTE_HISTORY_SIZE = 6

T = TypeVar("T", bound=Hashable)


class MajorityVoteSmoother(Generic[T]):
    """Smooths discrete values by voting over a fixed number of recent samples.

    Ties are broken by ``order``: when several values share the highest count, the one
    listed first wins. Values not listed in ``order`` never win a vote.
    """

    def __init__(self, order: Sequence[T], size: int = VOTE_HISTORY_SIZE):
        if not order:
            raise ValueError("At least one value is needed to vote")
        if size < 1:
            raise ValueError(f"History size must be positive, got {size}")
        self.order = tuple(order)
        self.size = size
        self.history: deque[T] = deque(maxlen=size)
        self._last_raw: T | None = None

    def update(self, value: T) -> T:
        """Push a new raw value (evicting the oldest if full) and return the vote."""
        self._last_raw = value
        self.history.append(value)
        return self.vote

    @property
    def vote(self) -> T:
        """Most frequent value of the history, earliest in ``order`` on ties."""
        counts = dict.fromkeys(self.order, 0)
        for value in self.history:
            if value in counts:
                counts[value] += 1

        best = self.order[0]
        best_count = -1
        for value in self.order:
            if counts[value] > best_count:
                best, best_count = value, counts[value]
        return best

    def clear(self) -> None:
        self.history.clear()
        self._last_raw = None

    @property
    def raw(self) -> T | None:
        """Get the last raw (unsmoothed) value."""
        return self._last_raw


class LerpSmoother:
    """Moves a value toward a target by a fraction of the remaining distance at each step."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def step(self, target: float, factor: float) -> float:
        """Advance toward ``target``. ``factor`` is usually ``delta * rate`` and is clamped to [0, 1]."""
        factor = min(max(factor, 0.0), 1.0)
        self.value += (target - self.value) * factor
        return self.value

    def snap(self, value: float) -> float:
        self.value = value
        return self.value
