from sqlmodel import select

from app.models import DictionaryWord, SecretWord
from app.services.dictionary import in_dictionary, load_word_list
from app.services.seed import seed_database, seed_words

from .helpers import SECRETS, WORDS


def test_seed_is_idempotent(session):
    # the session fixture already seeded the test lists
    assert seed_words(session, WORDS, SECRETS) == {"dictionary": 0, "secret_words": 0}
    assert len(session.exec(select(SecretWord)).all()) == len(SECRETS)


def test_secret_words_are_guessable(session):
    counts = seed_words(session, [], ["novel"])

    assert counts == {"dictionary": 1, "secret_words": 1}
    assert in_dictionary(session, "novel")


def test_malformed_words_are_skipped(session):
    counts = seed_words(session, ["toolong", "ab", "ab1cd", "quiet", "quiet"], [])
    assert counts == {"dictionary": 1, "secret_words": 0}


def test_bundled_lists(session):
    dictionary = load_word_list("dictionary.txt")
    secrets = load_word_list("secret_words.txt")
    assert all(len(w) == 5 for w in dictionary)
    assert set(secrets) <= set(dictionary)

    seed_database(session)
    total = len(session.exec(select(DictionaryWord)).all())
    assert total == len(set(dictionary) | set(WORDS))
