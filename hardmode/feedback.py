"""
Clue computation for hard-mode Wordle.

A GameState owns the hidden target for one game. Each call to `guess`
returns the 5 clues for that guess and folds what they reveal into the
game's ConstraintState, which later decides whether a word is still a legal
hard-mode guess.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Sequence, Tuple

from hardmode.constraints import ConstraintState, HardModeResult
from hardmode.letter_index import WORD_LENGTH, LetterIndex, validate_word


class Clue(IntEnum):
    UNKNOWN = 0
    GRAY = 1
    YELLOW = 2
    GREEN = 3


CLUE_CHARS = {
    Clue.UNKNOWN: " ",
    Clue.GRAY: "_",
    Clue.YELLOW: "Y",
    Clue.GREEN: "G",
}

Result = Tuple[Clue, ...]

ALL_GREEN: Result = (Clue.GREEN,) * WORD_LENGTH


def result_string(result: Sequence[Clue]) -> str:
    """Render clues left to right: ' ' unknown, '_' gray, 'Y' yellow, 'G' green."""
    return "".join(CLUE_CHARS[c] for c in result)


def parse_result(s: str) -> Result:
    """Inverse of `result_string`. Raises ValueError on bad input."""
    mapping = {v: k for k, v in CLUE_CHARS.items()}
    if len(s) != WORD_LENGTH:
        raise ValueError(f"clue string must be length {WORD_LENGTH}: {s!r}")
    try:
        return tuple(mapping[ch] for ch in s)
    except KeyError as e:
        raise ValueError("clue string must use only ' ', '_', 'Y', 'G'") from e


class GameState:
    def __init__(self, target: str) -> None:
        self.target = validate_word(target, "target")
        self.target_index = LetterIndex.build(target)
        self.constraints = ConstraintState()

    def guess(self, word: str) -> Tuple[Result, bool]:
        """
        Score `word` against the target and record the resulting constraints.

        Returns (clues, won). Duplicate letters the guess over-uses are
        resolved by position: greens first, then yellows in ascending
        position until the target's count is used up, the rest gray.
        """
        validate_word(word, "guess")
        word_index = LetterIndex.build(word)
        result = [Clue.UNKNOWN] * WORD_LENGTH
        cs = self.constraints

        for li, mine in word_index.present():
            theirs = self.target_index[li]

            if theirs.count == 0:
                # not in target: every copy is gray
                for j in mine.positions():
                    result[j] = Clue.GRAY
                    cs.exclude(j, li)
                cs.require_exactly(li, 0)

            elif mine.count <= theirs.count:
                # at most the right number: all green or yellow
                for j in mine.positions():
                    if theirs.at(j):
                        result[j] = Clue.GREEN
                        cs.set_green(j, li)
                    else:
                        result[j] = Clue.YELLOW
                        cs.exclude(j, li)
                cs.require_at_least(li, mine.count)

            else:
                # too many: greens, then the first `need` others yellow, rest gray
                need = theirs.count
                for j in mine.positions():
                    if theirs.at(j):
                        result[j] = Clue.GREEN
                        cs.set_green(j, li)
                        need -= 1
                for j in mine.positions():
                    if theirs.at(j):
                        continue
                    if need > 0:
                        result[j] = Clue.YELLOW
                        need -= 1
                    else:
                        result[j] = Clue.GRAY
                    cs.exclude(j, li)
                cs.require_exactly(li, theirs.count)

        clues = tuple(result)
        return clues, clues == ALL_GREEN

    # hard-mode checks delegate to the accumulated constraints
    def hard_mode_info(self, word: str) -> HardModeResult:
        return self.constraints.hard_mode_info(word)

    def hard_mode_problem(self, word: str) -> Optional[str]:
        return self.constraints.hard_mode_problem(word)

    def hard_mode_ok(self, word: str) -> bool:
        return self.constraints.hard_mode_ok(word)


def score_guess(target: str, guess: str) -> Result:
    """Clues for a single guess against `target`, with no game history."""
    clues, _ = GameState(target).guess(guess)
    return clues


if __name__ == "__main__":
    # Quick sanity checks
    assert result_string(score_guess("crane", "crane")) == "GGGGG"
    assert result_string(score_guess("speed", "erase")) == "Y__YY"
    assert result_string(score_guess("allow", "llama")) == "YGY__"
    print("feedback.py sanity checks passed.")
