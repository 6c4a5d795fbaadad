"""
simulate.py

Parallel random-play simulations over a word list.

- play_all: one task per target, each task owns its histogram and hands it
  back when done, so nothing is shared while games run.
- play_many_randomly: each task draws its own random target, so several tasks
  can land on the same word; their results go through a lock-protected
  SharedHistograms.

Both wait for every task before returning. The first task that raises
cancels whatever has not started yet and its exception is re-raised.
"""

from __future__ import annotations

import logging
import random
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from hardmode.env import play_randomly
from hardmode.histogram import HISTOGRAM_SIZE, ResultHistogram, SharedHistograms
from hardmode.vocab import WordLists

logger = logging.getLogger(__name__)

EXECUTORS = ("process", "thread")

# set once per worker process by _init_worker
_VALID: Sequence[str] = ()


def _init_worker(valid: Sequence[str]) -> None:
    global _VALID
    _VALID = valid


def _task_seed(seed: Optional[int], idx: int) -> Optional[int]:
    return None if seed is None else seed + idx


def simulate_target(
    target: str,
    n_trials: int,
    *,
    valid: Optional[Sequence[str]] = None,
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
    size: int = HISTOGRAM_SIZE,
) -> Tuple[str, ResultHistogram]:
    """Play `n_trials` random games against `target` and return its histogram."""
    words = valid if valid is not None else _VALID
    rng = random.Random(seed)
    hist = ResultHistogram(size)
    for _ in range(n_trials):
        hist.record(play_randomly(target, words, rng=rng, max_turns=max_turns))
    return target, hist


def _make_executor(kind: str, workers: Optional[int], valid: Sequence[str]) -> Executor:
    if kind == "process":
        return ProcessPoolExecutor(max_workers=workers, initializer=_init_worker, initargs=(tuple(valid),))
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    raise ValueError(f"unknown executor {kind!r}; expected one of {EXECUTORS}")


def _drain(executor: Executor, futures: List[Future], on_result: Callable[[object], None]) -> None:
    """Wait for all futures; on the first failure cancel the rest and re-raise."""
    done = 0
    try:
        for future in as_completed(futures):
            on_result(future.result())
            done += 1
            logger.debug("task %d/%d finished", done, len(futures))
    except BaseException:
        for f in futures:
            f.cancel()
        executor.shutdown(wait=True, cancel_futures=True)
        raise


def play_all(
    words: WordLists,
    n_trials: int,
    *,
    targets: Optional[Iterable[str]] = None,
    workers: Optional[int] = None,
    executor: str = "process",
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
    size: int = HISTOGRAM_SIZE,
) -> Dict[str, ResultHistogram]:
    """
    Play `n_trials` random games against every target.

    Returns {target: histogram} in the order of `words.targets` (or `targets`
    when given, which must all be valid words).
    """
    if n_trials <= 0:
        raise ValueError("n_trials must be positive")
    target_list = list(targets) if targets is not None else words.targets.words()
    unknown = [t for t in target_list if t not in words.valid]
    if unknown:
        raise ValueError(f"targets are not valid guesses: {unknown[:5]}")

    logger.info(
        "Simulating %d targets x %d trials (%s executor, workers=%s)",
        len(target_list), n_trials, executor, workers,
    )
    results: Dict[str, ResultHistogram] = {t: ResultHistogram(size) for t in target_list}
    valid = words.valid.words()

    def _collect(out: object) -> None:
        target, hist = out  # type: ignore[misc]
        results[target].merge(hist)

    with _make_executor(executor, workers, valid) as ex:
        task = partial(simulate_target, valid=valid if executor == "thread" else None)
        futures = [
            ex.submit(task, t, n_trials, seed=_task_seed(seed, i), max_turns=max_turns, size=size)
            for i, t in enumerate(target_list)
        ]
        _drain(ex, futures, _collect)

    logger.info("Finished %d games", n_trials * len(target_list))
    return results


def _random_target_task(
    shared: SharedHistograms,
    targets: Sequence[str],
    valid: Sequence[str],
    n_trials: int,
    seed: Optional[int],
    max_turns: Optional[int],
) -> str:
    rng = random.Random(seed)
    target = targets[rng.randrange(len(targets))]
    for _ in range(n_trials):
        shared.record(play_randomly(target, valid, rng=rng, max_turns=max_turns))
    return target


def play_many_randomly(
    words: WordLists,
    n_words: int,
    n_trials: int,
    *,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
    size: int = HISTOGRAM_SIZE,
) -> Dict[str, ResultHistogram]:
    """
    Run `n_words` tasks, each drawing a random target and playing `n_trials`
    games against it. Targets may repeat across tasks. Returns histograms for
    the targets drawn.
    """
    if n_words <= 0 or n_trials <= 0:
        raise ValueError("n_words and n_trials must be positive")

    logger.info("Simulating %d random targets x %d trials", n_words, n_trials)
    shared = SharedHistograms(size=size)
    targets = words.targets.words()
    valid = words.valid.words()

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(_random_target_task, shared, targets, valid, n_trials, _task_seed(seed, i), max_turns)
            for i in range(n_words)
        ]
        _drain(ex, futures, lambda target: None)

    logger.info("Finished %d games", n_words * n_trials)
    return shared.snapshot()
