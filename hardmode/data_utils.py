import pandas as pd
from hardmode.vocab import WordVocab, WordLists


def load_word_lists(csv_path: str, column: str = "word") -> WordLists:
    """
    Load targets and valid guesses from the answer-list CSV.
    Every row is a valid guess; rows where 'day' is not null are targets.
    Without a 'day' column, every word is also a target.
    """
    df = pd.read_csv(csv_path)
    if column not in df.columns:
        raise KeyError(f"column '{column}' not found in {csv_path}")
    valid = WordVocab.from_words(df[column].tolist())
    if "day" in df.columns:
        answer_df = df[df["day"].notna()]
        targets = WordVocab.from_words(answer_df[column].tolist())
    else:
        targets = valid
    return WordLists(targets, valid)


def load_text_words(path: str) -> WordVocab:
    """Load a word list with one word per line."""
    with open(path, "r", encoding="utf-8") as f:
        return WordVocab.from_words(f)


def load_text_word_lists(targets_path: str, valid_path: str) -> WordLists:
    """Load targets and valid guesses from two plain-text files."""
    return WordLists(load_text_words(targets_path), load_text_words(valid_path))
