import math
import threading

import numpy as np
import pytest

from hardmode.env import GameResult, Outcome
from hardmode.histogram import HISTOGRAM_SIZE, ResultHistogram, SharedHistograms
from hardmode.metrics import (
    METRICS,
    average_guesses,
    best_guesses,
    distribution_lines,
    not_in_6,
    run_metric,
    run_metrics,
    summarize,
    to_frame,
    worst_guesses,
)


@pytest.fixture
def results():
    return {
        "zebra": ResultHistogram.from_counts({3: 1, 7: 1}),
        "apple": ResultHistogram.from_counts({7: 2}),
        "mango": ResultHistogram.from_counts({2: 1, 5: 1}),
    }


def test_average_and_not_in_6_for_known_histogram():
    h = ResultHistogram.from_counts({4: 3, 5: 2})
    assert average_guesses(h) == pytest.approx(4.4)
    assert not_in_6(h) == 0.0
    assert worst_guesses(h) == 5
    assert best_guesses(h) == 4

    s = summarize({"abcde": h})
    assert s.mean == pytest.approx(4.4)
    assert s.not_in_6 == 0.0
    assert s.trials == 5
    assert s.abandoned == 0


def test_summary_worst_and_best_with_ties(results):
    s = summarize(results)
    assert s.worst == 7
    assert s.worst_words == ["apple", "zebra"]
    assert s.best == 2
    assert s.best_words == ["mango"]
    assert s.mean == pytest.approx((3 + 7 + 14 + 2 + 5) / 6)
    assert s.not_in_6 == pytest.approx(50.0)


def test_worst_per_metric(results):
    assert run_metric("worst", results).words == ["apple", "zebra"]
    assert run_metric("best", results).value == 7
    assert run_metric("best", results).words == ["apple"]
    line = run_metric("not-in-6", results)
    assert line.value == pytest.approx(100.0)
    assert str(run_metric("worst", results)) == "worst worst: 7 (apple zebra)"
    assert [m.name for m in run_metrics(results)] == [name for name, _ in METRICS]


def test_unknown_metric():
    with pytest.raises(KeyError):
        run_metric("median", {})


def test_reducers_do_not_mutate(results):
    before = {w: h.counts.copy() for w, h in results.items()}
    summarize(results)
    run_metrics(results)
    for w, h in results.items():
        assert np.array_equal(before[w], h.counts)


def test_abandoned_counted_separately():
    h = ResultHistogram()
    h.record(GameResult("crane", Outcome.WON, 3, []))
    h.record(GameResult("crane", Outcome.ABANDONED, 9, []))
    assert h.solved == 1
    assert h.abandoned == 1
    assert h.trials == 2
    assert worst_guesses(h) == 3

    s = summarize({"crane": h})
    assert s.trials == 2
    assert s.abandoned_pct == pytest.approx(50.0)
    assert s.mean == pytest.approx(3.0)


def test_never_solved_target_is_skipped():
    h = ResultHistogram.from_counts({}, abandoned=2)
    s = summarize({"crane": h, "trace": ResultHistogram.from_counts({4: 1})})
    assert s.worst_words == ["trace"]
    assert average_guesses(h) is None
    assert math.isnan(summarize({"crane": h}).mean)


def test_overflow_bucket():
    h = ResultHistogram()
    h.add(HISTOGRAM_SIZE + 50)
    assert h.overflow == 1
    assert worst_guesses(h) == HISTOGRAM_SIZE
    assert not_in_6(h) == 100.0


def test_distribution_lines():
    lines = distribution_lines({"abcde": ResultHistogram.from_counts({4: 3, 5: 2})})
    assert lines == ["4: 3/5 (cum. 3/5)", "5: 2/5 (cum. 5/5)"]


def test_distribution_lists_rare_targets():
    results = {"crane": ResultHistogram.from_counts({3: 200}), "trace": ResultHistogram.from_counts({9: 1})}
    lines = distribution_lines(results)
    assert lines[-1].endswith(" trace")
    assert "crane" not in lines[0]


def test_to_frame(results):
    df = to_frame(results)
    assert list(df["word"]) == ["zebra", "apple", "mango"]
    assert list(df.columns) == ["word", "trials", "solved", "abandoned", "worst", "best", "average", "not-in-6"]
    assert df.loc[df["word"] == "mango", "average"].item() == pytest.approx(3.5)


def test_shared_histograms_lose_no_updates():
    shared = SharedHistograms(["crane"])
    result = GameResult("crane", Outcome.WON, 4, [])

    def worker():
        for _ in range(1000):
            shared.record(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    snap = shared.snapshot()
    assert snap["crane"].counts[4] == 8000
    assert len(shared) == 1


def test_merge():
    a = ResultHistogram.from_counts({3: 1})
    a.merge(ResultHistogram.from_counts({3: 2, 5: 1}, abandoned=1))
    assert a == ResultHistogram.from_counts({3: 3, 5: 1}, abandoned=1)
    with pytest.raises(ValueError):
        a.merge(ResultHistogram(10))
