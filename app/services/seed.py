import logging
from typing import Dict, Iterable, List

from sqlmodel import Session, select

from ..models import DictionaryWord, SecretWord
from .dictionary import is_well_formed, load_word_list

logger = logging.getLogger(__name__)

DICTIONARY_FILE = "dictionary.txt"
SECRET_WORDS_FILE = "secret_words.txt"


def _clean(words: Iterable[str], source: str) -> List[str]:
    """Drops malformed lines and duplicates, keeps file order."""
    cleaned: List[str] = []
    seen = set()
    for w in words:
        if not is_well_formed(w):
            logger.warning("Skipping malformed word %r in %s", w, source)
            continue
        if w not in seen:
            seen.add(w)
            cleaned.append(w)
    return cleaned


def seed_words(session: Session, dictionary: Iterable[str], secret_words: Iterable[str]) -> Dict[str, int]:
    """
    Inserts missing words only, so it can run any number of times.
    Every secret word is also guessable.
    Returns how many rows were added per table.
    """
    secrets = _clean(secret_words, "secret words")
    words = _clean(list(dictionary) + secrets, "dictionary")

    existing_dict = set(session.exec(select(DictionaryWord.word)).all())
    existing_secret = set(session.exec(select(SecretWord.word)).all())

    new_dict = [w for w in words if w not in existing_dict]
    new_secret = [w for w in secrets if w not in existing_secret]

    session.add_all(DictionaryWord(word=w) for w in new_dict)
    session.add_all(SecretWord(word=w) for w in new_secret)
    session.commit()

    logger.info("Seeded %d dictionary words, %d secret words", len(new_dict), len(new_secret))
    return {"dictionary": len(new_dict), "secret_words": len(new_secret)}


def seed_database(session: Session) -> Dict[str, int]:
    """Seeds from the bundled app/data word lists."""
    return seed_words(
        session,
        load_word_list(DICTIONARY_FILE),
        load_word_list(SECRET_WORDS_FILE),
    )
