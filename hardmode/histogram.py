"""
histogram.py

Per-target guess-count distributions.

A ResultHistogram has one bucket per guess count 0..HISTOGRAM_SIZE-1, an
overflow bucket for longer games, and a separate counter for abandoned games
(which never enter a guess-count bucket).
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Mapping

import numpy as np

from hardmode.env import GameResult

HISTOGRAM_SIZE = 100


class ResultHistogram:
    def __init__(self, size: int = HISTOGRAM_SIZE) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        # last slot is the overflow bucket
        self.counts = np.zeros(size + 1, dtype=np.int64)
        self.abandoned = 0

    @classmethod
    def from_counts(cls, counts: Mapping[int, int], abandoned: int = 0, size: int = HISTOGRAM_SIZE) -> "ResultHistogram":
        """Build a histogram from {guess_count: trials}."""
        h = cls(size)
        for guesses, n in counts.items():
            h.add(guesses, n)
        h.abandoned = int(abandoned)
        return h

    def add(self, guesses: int, n: int = 1) -> None:
        if guesses < 0:
            raise ValueError(f"guess count must be non-negative, got {guesses}")
        self.counts[min(guesses, self.size)] += n

    def record(self, result: GameResult) -> None:
        if result.won:
            self.add(result.guesses)
        else:
            self.abandoned += 1

    def merge(self, other: "ResultHistogram") -> None:
        if other.size != self.size:
            raise ValueError("cannot merge histograms of different sizes")
        self.counts += other.counts
        self.abandoned += other.abandoned

    @property
    def overflow(self) -> int:
        return int(self.counts[self.size])

    @property
    def solved(self) -> int:
        return int(self.counts.sum())

    @property
    def trials(self) -> int:
        return self.solved + self.abandoned

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultHistogram):
            return NotImplemented
        return (
            self.size == other.size
            and self.abandoned == other.abandoned
            and bool(np.array_equal(self.counts, other.counts))
        )

    def __repr__(self) -> str:
        nz = {int(i): int(c) for i, c in enumerate(self.counts) if c}
        return f"ResultHistogram({nz}, abandoned={self.abandoned})"


class SharedHistograms:
    """
    Histograms keyed by target, safe to update from several threads at once.
    Use this when more than one worker may record results for the same target.
    """

    def __init__(self, targets: Iterable[str] = (), size: int = HISTOGRAM_SIZE) -> None:
        self.size = size
        self._lock = threading.Lock()
        self._results: Dict[str, ResultHistogram] = {t: ResultHistogram(size) for t in targets}

    def record(self, result: GameResult) -> None:
        with self._lock:
            h = self._results.get(result.target)
            if h is None:
                h = self._results[result.target] = ResultHistogram(self.size)
            h.record(result)

    def snapshot(self) -> Dict[str, ResultHistogram]:
        """Copy of the current histograms."""
        with self._lock:
            out = {}
            for t, h in self._results.items():
                c = ResultHistogram(h.size)
                c.merge(h)
                out[t] = c
            return out

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
