from dataclasses import dataclass

from ..errors import BoundaryError

UP = "up"
DOWN = "down"
WIN = "win"

IN_PROGRESS = "in-progress"
WON = "won"
LOST = "lost"

WIN_MESSAGE = "Congratulations! You guessed the word!"
TOO_LOW_MESSAGE = "Too low! Try higher."
TOO_HIGH_MESSAGE = "Too high! Try lower."


@dataclass
class GuessOutcome:
    """Result of one accepted guess: the new bounds and how we got there."""
    top: str
    bottom: str
    direction: str
    completed: bool
    won: bool
    message: str


def game_status(completed: bool, won: bool) -> str:
    if not completed:
        return IN_PROGRESS
    return WON if won else LOST


def in_bounds(guess: str, top: str, bottom: str) -> bool:
    return top < guess < bottom


def apply_guess(
    top: str,
    bottom: str,
    secret: str,
    guess: str,
    guess_count: int = 0,
    max_guesses: int = 0,
) -> GuessOutcome:
    """
    Bracket state machine for a single, already-validated guess.
    - guess <= top or guess >= bottom -> BoundaryError, nothing changes
    - guess == secret                 -> win
    - guess <  secret                 -> top moves down to guess ("up" arrow)
    - guess >  secret                 -> bottom moves up to guess ("down" arrow)
    guess_count is the number of guesses made before this one; with
    max_guesses > 0 the guess that reaches the limit without winning ends
    the game as lost.
    """
    if not in_bounds(guess, top, bottom):
        raise BoundaryError(f"Guess must be between {top.upper()} and {bottom.upper()}")

    if guess == secret:
        return GuessOutcome(top, bottom, WIN, completed=True, won=True, message=WIN_MESSAGE)

    if guess < secret:
        outcome = GuessOutcome(guess, bottom, UP, completed=False, won=False, message=TOO_LOW_MESSAGE)
    else:
        outcome = GuessOutcome(top, guess, DOWN, completed=False, won=False, message=TOO_HIGH_MESSAGE)

    if max_guesses > 0 and guess_count + 1 >= max_guesses:
        outcome.completed = True
        outcome.message = f"Out of guesses! The word was {secret.upper()}."
    return outcome
