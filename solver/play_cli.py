"""
solver/play_cli.py

Play hard-mode Wordle in the terminal against a random target.
- Each guess must be a valid word and respect every clue seen so far.
- Clues: '_' gray, 'Y' yellow, 'G' green.
- With --auto, the computer plays randomly and prints each step.

Run:
  python -m solver.play_cli --csv word_list.csv
  python -m solver.play_cli --csv word_list.csv --auto --seed 3

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional

from hardmode.constraints import filter_candidates
from hardmode.data_utils import load_word_lists
from hardmode.env import play_randomly
from hardmode.feedback import GameState, result_string
from hardmode.sampler import WordSampler
from hardmode.vocab import WordLists, valid_word

MAX_READ_ERRORS = 10


def play(
    words: WordLists,
    target: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Optional[int]:
    """Interactive game. Returns the number of guesses on a win, None if the player stopped."""
    state = GameState(target)
    possible = words.valid.words()
    i = 1
    errs = 0
    while True:
        write(f"Valid words: {len(possible)}")
        try:
            guess = read(f"Guess {i}: ")
        except EOFError as e:
            write(f"Read failed: {e!r}")
            errs += 1
            if errs > MAX_READ_ERRORS:
                return None
            continue
        guess = guess.strip().lower()
        if guess in {"q", "quit", "exit"}:
            write(f"The word was {target}.")
            return None
        if not valid_word(guess) or guess not in words.valid:
            write(f"Invalid guess: {guess}")
            continue
        problem = state.hard_mode_problem(guess)
        if problem is not None:
            write(f"Hard mode: {problem}")
            continue

        result, won = state.guess(guess)
        write(f"Clues {i}: {result_string(result)}")
        if won:
            write("You won!")
            return i

        possible = filter_candidates(possible, state.constraints)
        i += 1


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Hard-mode Wordle in the terminal")
    ap.add_argument("--csv", default="word_list.csv", help="Path to word_list.csv")
    ap.add_argument("--seed", type=int, default=None, help="RNG seed for the target (and auto guesses)")
    ap.add_argument("--target", default=None, help="Use this target instead of a random one")
    ap.add_argument("--auto", action="store_true", help="Let the computer guess randomly")
    args = ap.parse_args(argv)

    try:
        words = load_word_lists(args.csv)
    except (OSError, KeyError, ValueError) as e:
        print(f"Could not load word lists: {e}", file=sys.stderr)
        return 1

    sampler = WordSampler(words.targets, seed=args.seed)
    target = args.target.lower() if args.target else sampler.choice_word()
    if target not in words.valid:
        print(f"Target is not a valid word: {target}", file=sys.stderr)
        return 1

    if args.auto:
        result = play_randomly(target, words.valid, rng=sampler.rng, trace=print)
        print(f"{result.outcome.value} in {result.guesses} guesses (target: {target})")
    else:
        play(words, target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
