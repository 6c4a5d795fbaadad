"""
letter_index.py

Per-letter occurrence counts and position masks for a 5-letter word.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Tuple

WORD_LENGTH = 5
ALPHABET_SIZE = 26


class InvalidWordError(ValueError):
    """Raised when a word is not exactly 5 lowercase letters a-z."""


def letter_id(c: str) -> int:
    """Map a lowercase letter to 0..25."""
    return ord(c) - 97


def letter_char(i: int) -> str:
    return chr(i + 97)


def validate_word(word: str, what: str = "word") -> str:
    """Return `word` unchanged, or raise InvalidWordError."""
    if not isinstance(word, str):
        raise InvalidWordError(f"{what} must be a string, got {type(word).__name__}")
    if len(word) != WORD_LENGTH:
        raise InvalidWordError(f"invalid {what}: len({word!r}) = {len(word)}")
    # str.isalpha() accepts non-ASCII letters, so check the range explicitly
    if any(not ("a" <= c <= "z") for c in word):
        raise InvalidWordError(f"invalid {what}: {word!r} must use only letters a-z")
    return word


class LetterEntry(NamedTuple):
    count: int = 0
    mask: int = 0

    def at(self, pos: int) -> bool:
        return self.mask & (1 << pos) != 0

    def positions(self) -> Iterator[int]:
        for pos in range(WORD_LENGTH):
            if self.at(pos):
                yield pos


class LetterIndex:
    """
    For each of the 26 letters: how many times it occurs in the word and a
    bitmask of the positions where it occurs (bit i = position i).
    """

    __slots__ = ("word", "_entries")

    def __init__(self, word: str, entries: Tuple[LetterEntry, ...]) -> None:
        self.word = word
        self._entries = entries

    @classmethod
    def build(cls, word: str) -> "LetterIndex":
        validate_word(word)
        counts = [0] * ALPHABET_SIZE
        masks = [0] * ALPHABET_SIZE
        for i, c in enumerate(word):
            li = letter_id(c)
            counts[li] += 1
            masks[li] |= 1 << i
        return cls(word, tuple(LetterEntry(n, m) for n, m in zip(counts, masks)))

    def __getitem__(self, letter: int) -> LetterEntry:
        return self._entries[letter]

    def __iter__(self) -> Iterator[LetterEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return ALPHABET_SIZE

    def count(self, letter: int) -> int:
        return self._entries[letter].count

    def mask(self, letter: int) -> int:
        return self._entries[letter].mask

    def present(self) -> Iterator[Tuple[int, LetterEntry]]:
        """Yield (letter, entry) for letters occurring at least once, in letter order."""
        for li, entry in enumerate(self._entries):
            if entry.count:
                yield li, entry

    def __repr__(self) -> str:
        return f"LetterIndex({self.word!r})"
