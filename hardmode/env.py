"""
env.py

Plays one hard-mode game to completion against a fixed target.

Each turn a policy picks a guess from the current candidate set, the guess is
scored, and (unless it won) the candidate set is narrowed to the words that
still satisfy every hard-mode constraint. The game ends WON, or ABANDONED if
the candidate set runs dry or the turn cap is hit.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from hardmode.constraints import filter_candidates
from hardmode.feedback import GameState, Result, result_string

Policy = Callable[[Sequence[str], random.Random], str]
Trace = Callable[[str], None]


def random_policy(candidates: Sequence[str], rng: random.Random) -> str:
    """Uniformly random choice among the remaining candidates."""
    return candidates[rng.randrange(len(candidates))]


def first_candidate_policy(candidates: Sequence[str], rng: random.Random) -> str:
    """Always the first remaining candidate (deterministic, for tests and demos)."""
    return candidates[0]


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    ABANDONED = "abandoned"


class GameResult(NamedTuple):
    target: str
    outcome: Outcome
    guesses: int
    history: List[Tuple[str, Result]]

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON


class HardModeGame:
    """
    One simulated game.

    Parameters
    ----------
    valid : iterable of str
        Every acceptable guess; the initial candidate set, in order.
    target : str
        The hidden word.
    rng : random.Random, optional
        Source of randomness for the policy. A fresh unseeded one if omitted.
    policy : callable, default=random_policy
        ``policy(candidates, rng) -> guess``.
    max_turns : int, optional
        Turn cap. Defaults to the size of the initial candidate set, which a
        game whose target is a valid word can never exceed.
    trace : callable, optional
        Receives one line of text per event (candidate count, guess, clues).
    """

    def __init__(
        self,
        valid: Iterable[str],
        target: str,
        *,
        rng: Optional[random.Random] = None,
        policy: Policy = random_policy,
        max_turns: Optional[int] = None,
        trace: Optional[Trace] = None,
    ) -> None:
        self.state = GameState(target)
        self.rng = rng if rng is not None else random.Random()
        self.policy = policy
        self.trace = trace

        self._candidates: List[str] = list(valid)
        self.max_turns = int(max_turns) if max_turns is not None else max(1, len(self._candidates))
        if self.max_turns <= 0:
            raise ValueError("max_turns must be positive")

        self.outcome = Outcome.IN_PROGRESS
        self.turn = 0
        self.history: List[Tuple[str, Result]] = []

    @property
    def target(self) -> str:
        return self.state.target

    @property
    def candidates(self) -> List[str]:
        return list(self._candidates)

    @property
    def remaining_candidates(self) -> int:
        return len(self._candidates)

    def _emit(self, line: str) -> None:
        if self.trace is not None:
            self.trace(line)

    def step(self) -> Outcome:
        """Play a single turn and return the resulting outcome."""
        if self.outcome is not Outcome.IN_PROGRESS:
            raise RuntimeError(f"game is already over ({self.outcome.value})")

        if not self._candidates or self.turn >= self.max_turns:
            self.outcome = Outcome.ABANDONED
            self._emit(f"Abandoned after {self.turn} guesses")
            return self.outcome

        self.turn += 1
        guess = self.policy(self._candidates, self.rng)
        result, won = self.state.guess(guess)
        self.history.append((guess, result))

        self._emit(f"Valid words: {len(self._candidates)}")
        self._emit(f"Guess {self.turn}: {guess}")
        self._emit(f"Clues {self.turn}: {result_string(result)}")

        if won:
            self.outcome = Outcome.WON
            self._emit("You won!")
            return self.outcome

        self._candidates = filter_candidates(self._candidates, self.state.constraints)
        return self.outcome

    def play(self) -> GameResult:
        while self.outcome is Outcome.IN_PROGRESS:
            self.step()
        return GameResult(self.target, self.outcome, self.turn, list(self.history))


def play_randomly(
    target: str,
    valid: Iterable[str],
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    policy: Policy = random_policy,
    max_turns: Optional[int] = None,
    trace: Optional[Trace] = None,
) -> GameResult:
    """Play one game against `target`, guessing among `valid`."""
    if rng is None:
        rng = random.Random(seed)
    game = HardModeGame(valid, target, rng=rng, policy=policy, max_turns=max_turns, trace=trace)
    return game.play()
