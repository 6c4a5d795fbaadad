import pandas as pd

from hardmode.vocab import WordLists
from simulation import run_sim
from solver.play_cli import MAX_READ_ERRORS, play

VALID = ["crane", "trace", "brace", "grace", "crate", "caret", "react", "cater", "trade", "spade"]


def _scripted(lines):
    it = iter(lines)

    def read(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError("no more input") from None

    return read


def test_interactive_game_enforces_hard_mode():
    out = []
    guesses = play(
        WordLists(["crane"], VALID),
        "crane",
        read=_scripted(["xx", "zzzzz", "trace", "brace", "crane"]),
        write=out.append,
    )
    assert guesses == 2
    assert "Invalid guess: xx" in out
    assert "Invalid guess: zzzzz" in out
    assert "Clues 1: _GGYG" in out
    assert "Hard mode: can't use c as letter 4" in out
    assert out[-1] == "You won!"


def test_interactive_game_gives_up_after_read_errors():
    out = []
    assert play(WordLists(["crane"], VALID), "crane", read=_scripted([]), write=out.append) is None
    assert sum(line.startswith("Read failed") for line in out) == MAX_READ_ERRORS + 1


def test_interactive_quit():
    out = []
    assert play(WordLists(["crane"], VALID), "crane", read=_scripted(["q"]), write=out.append) is None
    assert out[-1] == "The word was crane."


def test_run_sim_main(tmp_path, capsys):
    t = tmp_path / "targets.txt"
    v = tmp_path / "valid.txt"
    t.write_text("crane\ntrace\n", encoding="utf-8")
    v.write_text("\n".join(VALID) + "\n", encoding="utf-8")
    out = tmp_path / "results.csv"

    code = run_sim.main([
        "--targets-file", str(t), "--valid-file", str(v),
        "--trials", "3", "--executor", "thread", "--seed", "1",
        "--distribution", "--out", str(out),
    ])
    assert code == 0
    printed = capsys.readouterr().out
    assert "worst average:" in printed
    assert "abandoned: 0/6" in printed
    df = pd.read_csv(out)
    assert list(df["word"]) == ["crane", "trace"]
    assert df["trials"].sum() == 6


def test_run_sim_sample_mode(tmp_path, capsys):
    t = tmp_path / "targets.txt"
    v = tmp_path / "valid.txt"
    t.write_text("crane\n", encoding="utf-8")
    v.write_text("\n".join(VALID) + "\n", encoding="utf-8")
    code = run_sim.main([
        "--targets-file", str(t), "--valid-file", str(v),
        "--mode", "sample", "--words", "4", "--trials", "2", "--seed", "0",
    ])
    assert code == 0
    assert "abandoned: 0/8" in capsys.readouterr().out


def test_run_sim_missing_file(tmp_path):
    assert run_sim.main(["--csv", str(tmp_path / "nope.csv")]) == 1
