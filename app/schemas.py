import datetime as dt
from typing import Optional, List, Literal
from pydantic import BaseModel


Direction = Literal["up", "down", "win"]


class SessionResponse(BaseModel):
    success: bool
    token: str
    session_id: str


class PuzzleResponse(BaseModel):
    id: int
    date: dt.date
    top_word: str
    bottom_word: str


class GameState(BaseModel):
    id: int
    current_top: str
    current_bottom: str
    guesses: List[str] = []
    guess_directions: List[Direction] = []
    completed: bool = False
    won: bool = False
    secret_word: Optional[str] = None  # only once completed


class GuessRequest(BaseModel):
    guess: Optional[str] = ""
    skip_validation: bool = False


class ValidateRequest(BaseModel):
    guess: Optional[str] = ""


class ActionResult(BaseModel):
    success: bool
    message: str
    new_state: Optional[GameState] = None


class ShareResponse(BaseModel):
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None


class SeedResponse(BaseModel):
    success: bool
    dictionary: int = 0
    secret_words: int = 0
