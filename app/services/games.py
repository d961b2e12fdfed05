import json
import logging
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ..config import settings
from ..errors import (
    ConcurrentUpdateError,
    GameCompletedError,
    GameNotFoundError,
    PersistenceError,
)
from ..models import DailyPuzzle, UserGame
from ..schemas import GameState
from .dictionary import check_guess_shape, normalize_word, validate_guess
from .game_engine import apply_guess, game_status
from .puzzle_generator import secret_word_of

logger = logging.getLogger(__name__)


def _as_list(raw: Optional[str]) -> List[str]:
    """JSON string column -> list[str]."""
    return json.loads(raw) if raw else []


def find_game(session: Session, session_id: str, puzzle_id: int) -> Optional[UserGame]:
    return session.exec(
        select(UserGame).where(
            UserGame.session_id == session_id,
            UserGame.daily_puzzle_id == puzzle_id,
        )
    ).first()


def get_or_create_game(session: Session, session_id: str, puzzle: DailyPuzzle) -> UserGame:
    """
    - Existing session + puzzle row is returned
    - Otherwise a fresh game starts from the puzzle's bracket words
    """
    game = find_game(session, session_id, puzzle.id)
    if game:
        return game

    game = UserGame(
        session_id=session_id,
        daily_puzzle_id=puzzle.id,
        current_top=puzzle.top_word,
        current_bottom=puzzle.bottom_word,
    )
    session.add(game)
    try:
        session.commit()
    except IntegrityError:
        # same session started the game from another request
        session.rollback()
        game = find_game(session, session_id, puzzle.id)
        if game is None:
            raise
        return game

    session.refresh(game)
    logger.info("Started game %s for puzzle %s", game.id, puzzle.id)
    return game


def to_game_state(game: UserGame, secret_word: Optional[str] = None) -> GameState:
    """The secret is only exposed for finished games."""
    return GameState(
        id=game.id,
        current_top=game.current_top,
        current_bottom=game.current_bottom,
        guesses=_as_list(game.guesses),
        guess_directions=_as_list(game.guess_directions),
        completed=game.completed,
        won=game.won,
        secret_word=secret_word if game.completed else None,
    )


def game_state_for(session: Session, game: UserGame, puzzle: DailyPuzzle) -> GameState:
    secret = secret_word_of(session, puzzle) if game.completed else None
    return to_game_state(game, secret)


def submit_guess(
    session: Session,
    session_id: str,
    puzzle: DailyPuzzle,
    raw_guess: str,
    skip_validation: bool = False,
) -> Tuple[str, GameState]:
    """
    One guess, one conditional row update.
    - skip_validation only skips the dictionary lookup (the client already
      called validate); the five-letter check always runs
    - the update is keyed on (id, version); a concurrent guess that landed
      first makes this one fail with ConcurrentUpdateError
    Returns (message, new state).
    """
    if skip_validation:
        guess = normalize_word(raw_guess)
        check_guess_shape(guess)
    else:
        guess = validate_guess(session, raw_guess)

    game = find_game(session, session_id, puzzle.id)
    if game is None:
        raise GameNotFoundError()
    if game.completed:
        raise GameCompletedError()
    expected_version = game.version

    secret = secret_word_of(session, puzzle)
    guesses = _as_list(game.guesses)
    directions = _as_list(game.guess_directions)

    outcome = apply_guess(
        game.current_top,
        game.current_bottom,
        secret,
        guess,
        guess_count=len(guesses),
        max_guesses=settings.MAX_GUESSES,
    )
    guesses.append(guess)
    directions.append(outcome.direction)

    stmt = (
        update(UserGame)
        .where(UserGame.id == game.id, UserGame.version == expected_version)
        .values(
            current_top=outcome.top,
            current_bottom=outcome.bottom,
            guesses=json.dumps(guesses),
            guess_directions=json.dumps(directions),
            completed=outcome.completed,
            won=outcome.won,
            version=expected_version + 1,
        )
    )
    try:
        result = session.execute(stmt)
        if result.rowcount != 1:
            session.rollback()
            logger.warning("Version conflict on game %s (version %s)", game.id, expected_version)
            raise ConcurrentUpdateError()
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to update game %s", game.id)
        raise PersistenceError()

    session.refresh(game)
    logger.info("Game %s: %s (%s)", game.id, outcome.direction, game_status(game.completed, game.won))
    return outcome.message, to_game_state(game, secret)
