"""
constraints.py

Keeps track of hard-mode constraints accumulated over a game's guesses and
filters candidate words against them.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

from hardmode.letter_index import (
    ALPHABET_SIZE,
    WORD_LENGTH,
    LetterIndex,
    letter_char,
    letter_id,
)


class ConstraintConflict(RuntimeError):
    """An established fact was about to change. The target never changes, so this is a bug."""


class Reason(Enum):
    OK = "ok"
    EXCLUDED = "excluded"
    EXACT_COUNT = "exact_count"
    MIN_COUNT = "min_count"
    GREEN_REQUIRED = "green_required"
    WRONG_POSITION = "wrong_position"


class HardModeResult(NamedTuple):
    """
    Outcome of a hard-mode check.

    `detail` is (letter, number): for count reasons the number is the required
    count, for positional reasons it is the 1-based position.
    """

    ok: bool
    reason: Reason = Reason.OK
    detail: Optional[Tuple[str, int]] = None

    @property
    def message(self) -> str:
        if self.ok:
            return ""
        c, n = self.detail  # type: ignore[misc]
        if self.reason is Reason.EXCLUDED:
            return f"can't use {c}"
        if self.reason is Reason.EXACT_COUNT:
            return f"need to use {c} exactly {n} times"
        if self.reason is Reason.MIN_COUNT:
            return f"need to use {c} at least {n} times"
        if self.reason is Reason.GREEN_REQUIRED:
            return f"need {c} as letter {n}"
        return f"can't use {c} as letter {n}"


ALLOWED = HardModeResult(True)


class LetterBound(NamedTuple):
    count: int = 0
    exact: bool = False


class ConstraintState:
    def __init__(self, word_length: int = WORD_LENGTH, alphabet_size: int = ALPHABET_SIZE):
        self.word_length = word_length
        self.alphabet_size = alphabet_size
        # positional constraints: the green letter (if known) and letters seen yellow/gray there
        self.greens: List[Optional[int]] = [None] * word_length
        self.wrong: List[Set[int]] = [set() for _ in range(word_length)]
        # letter-count constraints
        self.bounds: List[LetterBound] = [LetterBound()] * alphabet_size

    # -------------------------
    # Accumulation (called by the clue engine)
    # -------------------------
    def set_green(self, pos: int, letter: int) -> None:
        current = self.greens[pos]
        if current is not None and current != letter:
            raise ConstraintConflict(
                f"position {pos + 1} already green for {letter_char(current)}, got {letter_char(letter)}"
            )
        self.greens[pos] = letter

    def exclude(self, pos: int, letter: int) -> None:
        self.wrong[pos].add(letter)

    def require_at_least(self, letter: int, n: int) -> None:
        bound = self.bounds[letter]
        if bound.exact:
            if n > bound.count:
                raise ConstraintConflict(
                    f"{letter_char(letter)} is exactly {bound.count}, cannot require at least {n}"
                )
            return
        if n > bound.count:
            self.bounds[letter] = LetterBound(n, False)

    def require_exactly(self, letter: int, n: int) -> None:
        bound = self.bounds[letter]
        if bound.exact and bound.count != n:
            raise ConstraintConflict(
                f"{letter_char(letter)} is exactly {bound.count}, cannot change to {n}"
            )
        if not bound.exact and bound.count > n:
            raise ConstraintConflict(
                f"{letter_char(letter)} needs at least {bound.count}, cannot be exactly {n}"
            )
        self.bounds[letter] = LetterBound(n, True)

    # -------------------------
    # Validation
    # -------------------------
    def violations(self, word: str) -> Iterator[HardModeResult]:
        """Yield every violated constraint: letters ascending, then positions ascending."""
        index = LetterIndex.build(word)

        for li, bound in enumerate(self.bounds):
            have = index.count(li)
            c = letter_char(li)
            if bound.exact:
                # a previous guess over-used this letter, so the true count is known
                if have != bound.count:
                    if bound.count == 0:
                        yield HardModeResult(False, Reason.EXCLUDED, (c, 0))
                    else:
                        yield HardModeResult(False, Reason.EXACT_COUNT, (c, bound.count))
            elif have < bound.count:
                yield HardModeResult(False, Reason.MIN_COUNT, (c, bound.count))

        for pos, ch in enumerate(word):
            li = letter_id(ch)
            green = self.greens[pos]
            if green is not None and li != green:
                yield HardModeResult(False, Reason.GREEN_REQUIRED, (letter_char(green), pos + 1))
            if li in self.wrong[pos]:
                yield HardModeResult(False, Reason.WRONG_POSITION, (ch, pos + 1))

    def hard_mode_info(self, word: str) -> HardModeResult:
        for violation in self.violations(word):
            return violation
        return ALLOWED

    def hard_mode_problem(self, word: str) -> Optional[str]:
        result = self.hard_mode_info(word)
        return None if result.ok else result.message

    def hard_mode_ok(self, word: str) -> bool:
        return self.hard_mode_info(word).ok


def filter_candidates(words: Iterable[str], state: ConstraintState) -> List[str]:
    """Keep, in order, only the words that satisfy every accumulated constraint."""
    return [w for w in words if state.hard_mode_ok(w)]
