import re
from pathlib import Path
from typing import List

from sqlmodel import Session, select

from ..errors import GuessValidationError
from ..models import DictionaryWord

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

WORD_LENGTH = 5
_WORD_RE = re.compile(r"^[a-z]{5}$")


def normalize_word(raw: str) -> str:
    return (raw or "").strip().lower()


def is_well_formed(word: str) -> bool:
    return bool(_WORD_RE.match(word))


def check_guess_shape(word: str) -> None:
    """Exactly five letters a-z, otherwise GuessValidationError."""
    if not is_well_formed(word):
        raise GuessValidationError(f"Guess must be {WORD_LENGTH} letters")


def load_word_list(name: str) -> List[str]:
    """Loads a word list from app/data: one word per line, '#' for comments."""
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return [
            line.strip().lower()
            for line in f
            if line.strip() and not line.lstrip().startswith("#")
        ]


def in_dictionary(session: Session, word: str) -> bool:
    return session.get(DictionaryWord, word) is not None


def validate_guess(session: Session, raw: str) -> str:
    """
    Normalizes and validates a guess:
    - exactly 5 letters
    - present in the dictionary table
    Returns the lower-cased guess.
    """
    word = normalize_word(raw)
    check_guess_shape(word)
    if not in_dictionary(session, word):
        raise GuessValidationError("Word not in dictionary")
    return word


def all_words(session: Session) -> List[str]:
    """Whole dictionary in alphabetical order."""
    return list(session.exec(select(DictionaryWord.word).order_by(DictionaryWord.word)).all())
