import pytest

from hardmode.constraints import ALLOWED, Reason, filter_candidates
from hardmode.feedback import GameState
from hardmode.letter_index import InvalidWordError


@pytest.fixture
def after_trace():
    # target "crane", guess "trace" -> "_GGYG"
    state = GameState("crane")
    state.guess("trace")
    return state


def test_target_is_allowed(after_trace):
    assert after_trace.hard_mode_info("crane") == ALLOWED
    assert after_trace.hard_mode_problem("crane") is None
    assert after_trace.hard_mode_ok("crane")


@pytest.mark.parametrize(
    "word, reason, detail, message",
    [
        ("trace", Reason.EXCLUDED, ("t", 0), "can't use t"),
        ("cramp", Reason.MIN_COUNT, ("e", 1), "need to use e at least 1 times"),
        ("recan", Reason.GREEN_REQUIRED, ("r", 2), "need r as letter 2"),
        ("brace", Reason.WRONG_POSITION, ("c", 4), "can't use c as letter 4"),
    ],
)
def test_first_violation_is_reported(after_trace, word, reason, detail, message):
    result = after_trace.hard_mode_info(word)
    assert not result.ok
    assert result.reason is reason
    assert result.detail == detail
    assert result.message == message
    assert after_trace.hard_mode_problem(word) == message
    assert not after_trace.hard_mode_ok(word)


def test_exact_count_violation():
    state = GameState("speed")
    state.guess("geese")  # three e's against two -> exactly two
    result = state.hard_mode_info("eerie")
    assert result.reason is Reason.EXACT_COUNT
    assert result.message == "need to use e exactly 2 times"


def test_all_violations_listed_in_scan_order(after_trace):
    reasons = [(v.reason, v.detail) for v in after_trace.constraints.violations("trace")]
    assert reasons == [
        (Reason.EXCLUDED, ("t", 0)),
        (Reason.WRONG_POSITION, ("t", 1)),
        (Reason.WRONG_POSITION, ("c", 4)),
    ]


def test_filter_keeps_order_and_target(after_trace):
    words = ["grace", "crane", "trace", "crave", "brace", "enarc"]
    assert filter_candidates(words, after_trace.constraints) == ["crane", "crave"]


def test_filter_rejects_any_violation():
    state = GameState("speed")
    state.guess("erase")
    words = ["speed", "spree", "sheep", "steed", "erase", "seeds"]
    kept = filter_candidates(words, state.constraints)
    assert "speed" in kept
    for w in kept:
        assert list(state.constraints.violations(w)) == []


def test_candidates_shrink_and_keep_target():
    words = ["crane", "trace", "brace", "grace", "crate", "caret", "react", "cater", "trade", "spade"]
    state = GameState("crane")
    remaining = list(words)
    for guess in ["spade", "trace", "brace"]:
        state.guess(guess)
        nxt = filter_candidates(remaining, state.constraints)
        assert len(nxt) <= len(remaining)
        assert set(nxt) <= set(remaining)
        assert "crane" in nxt
        remaining = nxt


def test_invalid_candidate_raises(after_trace):
    with pytest.raises(InvalidWordError):
        after_trace.hard_mode_ok("cran")
