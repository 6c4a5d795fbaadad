from __future__ import annotations
from typing import Iterable, Iterator, List, Sequence, Tuple

from hardmode.letter_index import WORD_LENGTH


def valid_word(word: str) -> bool:
    """True iff `word` is 5 lowercase ASCII letters."""
    return (
        isinstance(word, str)
        and len(word) == WORD_LENGTH
        and all("a" <= c <= "z" for c in word)
    )


class WordVocab:
    """Ordered, immutable, duplicate-free list of valid words."""

    def __init__(self, words: Iterable[str]) -> None:
        words = list(words)
        if not words:
            raise ValueError("no words provided")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")
        bad = [w for w in words if not valid_word(w)]
        if bad:
            raise ValueError(f"invalid words (must be 5 letters a-z): {bad[:5]}")
        if len(set(words)) != len(words):
            raise ValueError("duplicate words detected; input to WordVocab must be deduplicated")

        self._words: Tuple[str, ...] = tuple(words)
        self._index = {w: i for i, w in enumerate(self._words)}

    # ---------- Construction helpers ----------

    @classmethod
    def from_words(
        cls,
        raw: Iterable[object],
        *,
        lowercase: bool = True,
        dedupe: bool = True,
    ) -> "WordVocab":
        """
        Build a WordVocab from untrusted input, skipping anything that is not
        a 5-letter a-z word.

        Parameters
        ----------
        raw : iterable
            Words as read from a file or DataFrame column.
        lowercase : bool, default=True
            If True, lowercase words before validation.
        dedupe : bool, default=True
            If True, keep the first occurrence and drop later duplicates.
        """
        clean: List[str] = []
        seen = set()

        for val in raw:
            if not isinstance(val, str):
                val = str(val) if val is not None else ""
            w = val.strip()
            w = w.lower() if lowercase else w
            if not valid_word(w):
                continue
            if dedupe:
                if w in seen:
                    continue
                seen.add(w)
            clean.append(w)

        if not clean:
            raise ValueError("no valid words after filtering")

        return cls(clean)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __getitem__(self, idx: int) -> str:
        return self._words[idx]

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def words(self) -> List[str]:
        """Return a copy of the word list (callers may mutate it freely)."""
        return list(self._words)

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]


class WordLists:
    """
    The two word universes a simulation runs over: `targets` (possible hidden
    words) and `valid` (acceptable guesses). Every target must be valid.
    """

    def __init__(self, targets: Sequence[str] | WordVocab, valid: Sequence[str] | WordVocab) -> None:
        self.targets = targets if isinstance(targets, WordVocab) else WordVocab(targets)
        self.valid = valid if isinstance(valid, WordVocab) else WordVocab(valid)
        missing = [w for w in self.targets if w not in self.valid]
        if missing:
            raise ValueError(f"{len(missing)} targets are not valid guesses, e.g. {missing[:5]}")

    def __repr__(self) -> str:
        return f"WordLists(targets={len(self.targets)}, valid={len(self.valid)})"
