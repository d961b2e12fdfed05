import logging
import random
from bisect import bisect_left, bisect_right
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..config import settings
from ..errors import PuzzleGenerationError
from ..models import DailyPuzzle, SecretWord
from .dictionary import all_words

logger = logging.getLogger(__name__)

# First-letter distance (in alphabet positions) for a good bracket word
IDEAL_MIN_DISTANCE = 2
IDEAL_MAX_DISTANCE = 4


def split_dictionary(secret: str, dictionary: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Sorted dictionary -> (words before secret, words after secret).
    The secret itself is never a candidate.
    """
    lo = bisect_left(dictionary, secret)
    hi = bisect_right(dictionary, secret)
    return list(dictionary[:lo]), list(dictionary[hi:])


def letter_distance(a: str, b: str) -> int:
    return abs(ord(a[0]) - ord(b[0]))


def _choose(candidates: List[str], secret: str, rng: random.Random) -> str:
    """
    Candidate preference:
    1. 2-4 letters away from the secret's first letter
    2. any word with a different first letter
    3. anything on the right side
    """
    ideal = [
        w for w in candidates
        if IDEAL_MIN_DISTANCE <= letter_distance(w, secret) <= IDEAL_MAX_DISTANCE
    ]
    if ideal:
        return rng.choice(ideal)

    differing = [w for w in candidates if w[0] != secret[0]]
    if differing:
        return rng.choice(differing)

    return rng.choice(candidates)


def pick_bracket_words(
    secret: str,
    dictionary: Sequence[str],
    rng: Optional[random.Random] = None,
) -> Tuple[str, str]:
    """Returns (top_word, bottom_word) with top < secret < bottom."""
    rng = rng or random.Random()
    below, above = split_dictionary(secret, dictionary)
    if not below or not above:
        raise PuzzleGenerationError(f"Cannot generate bracket words for '{secret}'")
    return _choose(below, secret, rng), _choose(above, secret, rng)


def has_enough_candidates(secret: str, dictionary: Sequence[str], minimum: int) -> bool:
    below, above = split_dictionary(secret, dictionary)
    return len(below) >= minimum and len(above) >= minimum


def claim_secret_word(session: Session, word_id: int) -> bool:
    """
    Conditional update: marks the word used only if it is still unused.
    False means another request claimed it first.
    Not committed here; the caller commits together with the puzzle row.
    """
    result = session.execute(
        update(SecretWord)
        .where(SecretWord.id == word_id, SecretWord.used == False)  # noqa: E712
        .values(used=True, used_date=datetime.now(timezone.utc))
    )
    return result.rowcount == 1


def generate_daily_puzzle(
    session: Session,
    day: date,
    rng: Optional[random.Random] = None,
) -> DailyPuzzle:
    """
    - Unused secret words are tried in random order
    - Words without MIN_BRACKET_CANDIDATES on each side are skipped
    - The first one we manage to claim becomes the day's secret
    Raises PuzzleGenerationError when no unused word qualifies.
    """
    rng = rng or random.Random()
    dictionary = all_words(session)

    unused = list(session.exec(select(SecretWord).where(SecretWord.used == False)).all())  # noqa: E712
    rng.shuffle(unused)

    minimum = settings.MIN_BRACKET_CANDIDATES
    for candidate in unused:
        if not has_enough_candidates(candidate.word, dictionary, minimum):
            continue
        if not claim_secret_word(session, candidate.id):
            logger.info("Secret word %s was claimed concurrently, trying next", candidate.id)
            continue

        top, bottom = pick_bracket_words(candidate.word, dictionary, rng)
        puzzle = DailyPuzzle(
            date=day,
            top_word=top,
            bottom_word=bottom,
            secret_word_id=candidate.id,
        )
        session.add(puzzle)
        session.commit()
        session.refresh(puzzle)
        logger.info("Generated puzzle %s for %s (%s .. %s)", puzzle.id, day, top, bottom)
        return puzzle

    logger.error("Puzzle generation failed for %s: %d unused secret words", day, len(unused))
    raise PuzzleGenerationError("No unused secret word has enough bracket candidates")


def find_puzzle(session: Session, day: date) -> Optional[DailyPuzzle]:
    return session.exec(select(DailyPuzzle).where(DailyPuzzle.date == day)).first()


def get_or_create_daily_puzzle(
    session: Session,
    day: date,
    rng: Optional[random.Random] = None,
) -> DailyPuzzle:
    """
    - Existing row for the day is returned as is
    - Otherwise a new puzzle is generated
    Two first requests racing on the same day: the loser hits the unique
    date constraint, rolls back (releasing its claim) and reads the winner.
    """
    puzzle = find_puzzle(session, day)
    if puzzle:
        return puzzle

    try:
        return generate_daily_puzzle(session, day, rng)
    except IntegrityError:
        session.rollback()
        logger.info("Puzzle for %s created concurrently, re-reading", day)
        puzzle = find_puzzle(session, day)
        if puzzle is None:
            raise
        return puzzle


def secret_word_of(session: Session, puzzle: DailyPuzzle) -> str:
    secret = session.get(SecretWord, puzzle.secret_word_id)
    if secret is None:
        raise PuzzleGenerationError(f"Secret word missing for puzzle {puzzle.id}")
    return secret.word
