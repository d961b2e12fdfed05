from datetime import date
import logging
from typing import Optional

from fastapi import FastAPI, Depends, Header, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from .config import settings
from .db import init_db, engine
from .errors import GameError, PuzzleGenerationError
from .logging_config import setup_logging
from .schemas import (
    ActionResult,
    GameState,
    GuessRequest,
    PuzzleResponse,
    SeedResponse,
    SessionResponse,
    ShareResponse,
    ValidateRequest,
)
from .auth import create_token, new_session_id, set_session_cookie
from .deps import get_db, get_current_session_id
from .services.dictionary import validate_guess
from .services.games import find_game, game_state_for, get_or_create_game, submit_guess
from .services.puzzle_generator import find_puzzle, get_or_create_daily_puzzle
from .services.seed import seed_database
from .services.share import build_share_text

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Bracket Word API",
    version="1.0.0",
    description="Daily five-letter word game: guess the word between two bracket words",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    """Create tables, optionally seed the word lists."""
    init_db()
    if settings.SEED_ON_STARTUP:
        with Session(engine) as session:
            seed_database(session)


def today() -> date:
    return date.today()


@app.get("/")
def root():
    return {"status": "ok", "app": "Bracket Word API"}


# ----------------------------------------------------
# SESSION
# ----------------------------------------------------


@app.post("/api/v1/session", response_model=SessionResponse)
def issue_session(response: Response):
    """
    New anonymous session:
    - random session id wrapped in a signed token
    - also set as an httpOnly cookie for browser clients
    """
    session_id = new_session_id()
    token = create_token(session_id)
    set_session_cookie(response, token)
    return SessionResponse(success=True, token=token, session_id=session_id)


# ----------------------------------------------------
# PUZZLE
# ----------------------------------------------------


@app.get("/api/v1/puzzle/today", response_model=PuzzleResponse)
def todays_puzzle(db: Session = Depends(get_db)):
    """Today's bracket words; generated on the first request of the day."""
    try:
        puzzle = get_or_create_daily_puzzle(db, today())
    except PuzzleGenerationError as exc:
        raise HTTPException(status_code=503, detail=exc.message)

    return PuzzleResponse(
        id=puzzle.id,
        date=puzzle.date,
        top_word=puzzle.top_word,
        bottom_word=puzzle.bottom_word,
    )


# ----------------------------------------------------
# GAME
# ----------------------------------------------------


@app.post("/api/v1/game", response_model=Optional[GameState])
def initialize_game(
    session_id: str = Depends(get_current_session_id),
    db: Session = Depends(get_db),
):
    """Starts (or resumes) the session's game on today's puzzle. null if no puzzle."""
    day = today()
    try:
        puzzle = get_or_create_daily_puzzle(db, day)
    except PuzzleGenerationError as exc:
        logger.error("No puzzle for %s: %s", day, exc.message)
        return None

    game = get_or_create_game(db, session_id, puzzle)
    return game_state_for(db, game, puzzle)


@app.get("/api/v1/game", response_model=Optional[GameState])
def user_game_state(
    session_id: str = Depends(get_current_session_id),
    db: Session = Depends(get_db),
):
    """Current game state, null until the game has been initialized."""
    puzzle = find_puzzle(db, today())
    if puzzle is None:
        return None
    game = find_game(db, session_id, puzzle.id)
    if game is None:
        return None
    return game_state_for(db, game, puzzle)


@app.post("/api/v1/validate", response_model=ActionResult)
def validate_word(
    payload: ValidateRequest,
    db: Session = Depends(get_db),
):
    """Length + dictionary check only; game state is untouched."""
    try:
        validate_guess(db, payload.guess)
    except GameError as exc:
        return ActionResult(success=False, message=exc.message)
    return ActionResult(success=True, message="Valid word")


@app.post("/api/v1/guess", response_model=ActionResult)
def guess_word(
    payload: GuessRequest,
    session_id: str = Depends(get_current_session_id),
    db: Session = Depends(get_db),
):
    """
    Applies one guess to the session's game.
    Every failure comes back as success=false with a message.
    """
    puzzle = find_puzzle(db, today())
    if puzzle is None:
        return ActionResult(success=False, message="No puzzle available")

    try:
        message, state = submit_guess(
            db,
            session_id,
            puzzle,
            payload.guess,
            skip_validation=payload.skip_validation,
        )
    except GameError as exc:
        return ActionResult(success=False, message=exc.message)

    return ActionResult(success=True, message=message, new_state=state)


@app.get("/api/v1/share", response_model=ShareResponse)
def share(
    session_id: str = Depends(get_current_session_id),
    db: Session = Depends(get_db),
):
    puzzle = find_puzzle(db, today())
    game = find_game(db, session_id, puzzle.id) if puzzle else None
    if game is None:
        return ShareResponse(success=False, error="Game not found")
    if not game.completed:
        return ShareResponse(success=False, error="Finish today's puzzle to share it")

    state = game_state_for(db, game, puzzle)
    return ShareResponse(success=True, text=build_share_text(state, puzzle.date))


# ----------------------------------------------------
# SEED
# ----------------------------------------------------


@app.post("/api/v1/seed", response_model=SeedResponse)
def seed(
    x_admin_token: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
):
    """Loads the bundled word lists. Disabled unless ADMIN_TOKEN is set."""
    if not settings.ADMIN_TOKEN or x_admin_token != settings.ADMIN_TOKEN:
        raise HTTPException(status_code=403, detail="Seeding not allowed")

    counts = seed_database(db)
    return SeedResponse(success=True, **counts)
