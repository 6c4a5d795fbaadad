from __future__ import annotations

import random
from typing import List, Sequence


class WordSampler:
    def __init__(self, words: Sequence[str], seed: int | None = None) -> None:
        if len(words) == 0:
            raise ValueError("no words to sample from")

        self._words = words

        # Create RNG (deterministic if seed provided)
        self._rng = random.Random(seed)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def choice_index(self) -> int:
        return self._rng.randrange(len(self._words))

    def choice_word(self) -> str:
        return self._words[self.choice_index()]

    def batch_words(self, k: int) -> List[str]:
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        return [self.choice_word() for _ in range(k)]
