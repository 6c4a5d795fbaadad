"""
metrics.py

Reduce per-target histograms to summary numbers.

Per-histogram reducers (METRICS) answer "how bad was this target"; run_metric
finds the target(s) that did worst on one reducer. summarize gives the
overall picture across every trial.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from hardmode.histogram import ResultHistogram

LOSS_CUTOFF = 6

Reducer = Callable[[ResultHistogram], Optional[float]]


def worst_guesses(h: ResultHistogram) -> Optional[int]:
    nz = np.flatnonzero(h.counts)
    return int(nz[-1]) if nz.size else None


def best_guesses(h: ResultHistogram) -> Optional[int]:
    nz = np.flatnonzero(h.counts)
    return int(nz[0]) if nz.size else None


def average_guesses(h: ResultHistogram) -> Optional[float]:
    solved = h.counts.sum()
    if solved == 0:
        return None
    return float(np.dot(np.arange(h.counts.size), h.counts) / solved)


def not_in_6(h: ResultHistogram) -> Optional[float]:
    """Percentage of solved trials that took more than 6 guesses."""
    solved = h.counts.sum()
    if solved == 0:
        return None
    return float(100 * h.counts[LOSS_CUTOFF + 1:].sum() / solved)


METRICS: List[Tuple[str, Reducer]] = [
    ("worst", worst_guesses),
    ("best", best_guesses),
    ("average", average_guesses),
    ("not-in-6", not_in_6),
]


class MetricLine(NamedTuple):
    name: str
    value: Optional[float]
    words: List[str]

    def __str__(self) -> str:
        return f"worst {self.name}: {self.value} ({' '.join(self.words)})"


def _reducer(name: str) -> Reducer:
    for n, fn in METRICS:
        if n == name:
            return fn
    raise KeyError(f"unknown metric {name!r}; expected one of {[n for n, _ in METRICS]}")


def _extreme(values: Mapping[str, Optional[float]], pick: Callable) -> Tuple[Optional[float], List[str]]:
    """Best value under `pick` (max or min) and every word that has it, sorted."""
    present = {w: v for w, v in values.items() if v is not None}
    if not present:
        return None, []
    target = pick(present.values())
    return target, sorted(w for w, v in present.items() if v == target)


def run_metric(name: str, results: Mapping[str, ResultHistogram]) -> MetricLine:
    """Worst value of metric `name` across targets, with all tied targets. Targets never solved are skipped."""
    fn = _reducer(name)
    value, words = _extreme({w: fn(h) for w, h in results.items()}, max)
    return MetricLine(name, value, words)


def run_metrics(results: Mapping[str, ResultHistogram]) -> List[MetricLine]:
    return [run_metric(name, results) for name, _ in METRICS]


class Summary(NamedTuple):
    worst: Optional[int]
    worst_words: List[str]
    best: Optional[int]
    best_words: List[str]
    mean: float
    not_in_6: float
    trials: int
    abandoned: int

    @property
    def abandoned_pct(self) -> float:
        return 100 * self.abandoned / self.trials if self.trials else math.nan

    def lines(self) -> List[str]:
        return [
            f"worst guesses: {self.worst} ({' '.join(self.worst_words)})",
            f"best guesses: {self.best} ({' '.join(self.best_words)})",
            f"average guesses: {self.mean:.3f}",
            f"not-in-{LOSS_CUTOFF}: {self.not_in_6:.3f}%",
            f"abandoned: {self.abandoned}/{self.trials} ({self.abandoned_pct:.3f}%)",
        ]


def summarize(results: Mapping[str, ResultHistogram]) -> Summary:
    """Overall worst/best guess counts (with their targets), mean, loss rate and abandoned count."""
    worst, worst_words = _extreme({w: worst_guesses(h) for w, h in results.items()}, max)
    best, best_words = _extreme({w: best_guesses(h) for w, h in results.items()}, min)

    solved = sum(h.solved for h in results.values())
    abandoned = sum(h.abandoned for h in results.values())
    if solved:
        total = sum(float(np.dot(np.arange(h.counts.size), h.counts)) for h in results.values())
        losses = sum(int(h.counts[LOSS_CUTOFF + 1:].sum()) for h in results.values())
        mean = total / solved
        loss_pct = 100 * losses / solved
    else:
        mean = loss_pct = math.nan

    return Summary(worst, worst_words, best, best_words, mean, loss_pct, solved + abandoned, abandoned)


def distribution_lines(results: Mapping[str, ResultHistogram]) -> List[str]:
    """
    Cumulative distribution of guess counts over all trials. Buckets holding
    at most 1% of trials also list the targets that landed there.
    """
    if not results:
        return []
    size = next(iter(results.values())).size
    total = np.zeros(size + 1, dtype=np.int64)
    for h in results.values():
        total += h.counts
    abandoned = sum(h.abandoned for h in results.values())
    n = int(total.sum()) + abandoned

    width = len(str(n))
    out: List[str] = []
    cum = 0
    for i, c in enumerate(total):
        c = int(c)
        if c == 0:
            continue
        cum += c
        label = f"{i:>{width}}" if i < size else f"{size}+"
        line = f"{label}: {c:>{width}}/{n:>{width}} (cum. {cum:>{width}}/{n:>{width}})"
        if c <= n / 100:
            words: List[str] = []
            for w in sorted(results):
                words.extend([w] * int(results[w].counts[i]))
            line += " " + " ".join(words)
        out.append(line)
    if abandoned:
        out.append(f"abandoned: {abandoned}/{n}")
    return out


def to_frame(results: Mapping[str, ResultHistogram]) -> pd.DataFrame:
    """One row per target with its trial counts and reducer values."""
    rows: List[Dict[str, object]] = []
    for word, h in results.items():
        row: Dict[str, object] = {
            "word": word,
            "trials": h.trials,
            "solved": h.solved,
            "abandoned": h.abandoned,
        }
        for name, fn in METRICS:
            v = fn(h)
            row[name] = math.nan if v is None else v
        rows.append(row)
    return pd.DataFrame(rows, columns=["word", "trials", "solved", "abandoned"] + [n for n, _ in METRICS])
