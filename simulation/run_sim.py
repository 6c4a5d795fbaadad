"""
simulation/run_sim.py

Monte Carlo evaluation of random hard-mode play.
Every guess is drawn uniformly from the words still allowed by hard mode, and
we count how many guesses each target takes.

Usage examples:
  python -m simulation.run_sim --csv word_list.csv --trials 1000
  python -m simulation.run_sim --csv word_list.csv --mode sample --words 1000 --trials 10 --distribution
  python -m simulation.run_sim --targets-file answers.txt --valid-file guesses.txt --trials 100 --out results.csv

Prints the per-target "worst" metrics and an overall summary.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from hardmode.data_utils import load_text_word_lists, load_word_lists
from hardmode.metrics import distribution_lines, run_metrics, summarize, to_frame
from hardmode.simulate import EXECUTORS, play_all, play_many_randomly
from hardmode.vocab import WordLists


def _load(args: argparse.Namespace) -> WordLists:
    if args.targets_file or args.valid_file:
        if not (args.targets_file and args.valid_file):
            raise ValueError("--targets-file and --valid-file must be given together")
        return load_text_word_lists(args.targets_file, args.valid_file)
    return load_word_lists(args.csv)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Simulate random hard-mode Wordle play across a word list.")
    ap.add_argument("--csv", default="word_list.csv", help="Path to word_list.csv")
    ap.add_argument("--targets-file", default=None, help="Text file of target words (one per line)")
    ap.add_argument("--valid-file", default=None, help="Text file of valid guesses (one per line)")
    ap.add_argument("--mode", choices=["all", "sample"], default="all",
                    help="'all': every target; 'sample': --words randomly drawn targets")
    ap.add_argument("--trials", type=int, default=1000, help="Games per target (per draw in sample mode)")
    ap.add_argument("--words", type=int, default=1000, help="Number of random targets in sample mode")
    ap.add_argument("--workers", type=int, default=None, help="Worker count (default: executor's choice)")
    ap.add_argument("--executor", choices=EXECUTORS, default="process", help="Executor for --mode all")
    ap.add_argument("--seed", type=int, default=None, help="Base RNG seed")
    ap.add_argument("--max-turns", type=int, default=None, help="Abandon a game after this many guesses")
    ap.add_argument("--distribution", action="store_true", help="Print the guess-count distribution")
    ap.add_argument("--out", default=None, help="Write per-target results to this CSV path")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        words = _load(args)
    except (OSError, KeyError, ValueError) as e:
        print(f"Could not load word lists: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {len(words.targets)} targets and {len(words.valid)} valid guesses", flush=True)

    t0 = time.perf_counter()
    if args.mode == "all":
        results = play_all(
            words, args.trials,
            workers=args.workers, executor=args.executor, seed=args.seed, max_turns=args.max_turns,
        )
    else:
        results = play_many_randomly(
            words, args.words, args.trials,
            workers=args.workers, seed=args.seed, max_turns=args.max_turns,
        )
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    if args.distribution:
        for line in distribution_lines(results):
            print(line)
    for metric in run_metrics(results):
        print(metric)
    for line in summarize(results).lines():
        print(line)

    if args.out:
        to_frame(results).to_csv(args.out, index=False)
        print(f"Wrote results to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
