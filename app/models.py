import datetime as dt
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class SecretWord(SQLModel, table=True):
    """
    Candidate secret words, seeded in bulk.
    - used: claimed by a daily puzzle, never handed out again
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    word: str = Field(index=True, unique=True, max_length=5)
    used: bool = Field(default=False, index=True)
    used_date: Optional[dt.datetime] = None


class DictionaryWord(SQLModel, table=True):
    """Every guessable five-letter word (lower-case)."""
    word: str = Field(primary_key=True, max_length=5)


class DailyPuzzle(SQLModel, table=True):
    """
    One puzzle per calendar day.
    top_word < secret < bottom_word (alphabetical)
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    date: dt.date = Field(index=True, unique=True)
    top_word: str
    bottom_word: str
    secret_word_id: int = Field(foreign_key="secretword.id")


class UserGame(SQLModel, table=True):
    """
    A session's progress on a daily puzzle.
    Same session_id + daily_puzzle_id -> one row.
    - guesses / guess_directions: JSON strings (list[str])
    - version: bumped on every update, used for compare-and-swap
    """
    __table_args__ = (UniqueConstraint("session_id", "daily_puzzle_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: str = Field(index=True)
    daily_puzzle_id: int = Field(foreign_key="dailypuzzle.id")
    current_top: str
    current_bottom: str
    guesses: str = "[]"
    guess_directions: str = "[]"
    completed: bool = False
    won: bool = False
    version: int = 0
