import pytest

from app.errors import BoundaryError, GuessValidationError
from app.services.dictionary import check_guess_shape, normalize_word
from app.services.game_engine import (
    DOWN,
    IN_PROGRESS,
    LOST,
    UP,
    WIN,
    WON,
    apply_guess,
    game_status,
)

from .helpers import WORDS


def test_guess_before_secret_moves_top():
    outcome = apply_guess("apple", "chair", "bingo", "bacon")

    assert outcome.top == "bacon"
    assert outcome.bottom == "chair"
    assert outcome.direction == UP
    assert not outcome.completed


def test_guess_after_secret_moves_bottom():
    # "cabin" sorts after "bingo", so it becomes the new bottom word
    outcome = apply_guess("apple", "chair", "bingo", "cabin")

    assert outcome.top == "apple"
    assert outcome.bottom == "cabin"
    assert outcome.direction == DOWN
    assert not outcome.completed


def test_exact_guess_wins():
    outcome = apply_guess("apple", "chair", "bingo", "bingo")

    assert outcome.direction == WIN
    assert outcome.completed and outcome.won
    assert outcome.message == "Congratulations! You guessed the word!"


@pytest.mark.parametrize("guess", ["apple", "aaaaa", "chair", "zebra"])
def test_out_of_range_guess_is_rejected(guess):
    with pytest.raises(BoundaryError) as exc:
        apply_guess("apple", "chair", "bingo", guess)
    assert exc.value.message == "Guess must be between APPLE and CHAIR"


def test_every_in_range_guess_has_exactly_one_effect():
    top, bottom, secret = "apple", "river", "mango"
    for guess in [w for w in WORDS if top < w < bottom]:
        outcome = apply_guess(top, bottom, secret, guess)
        effects = [
            outcome.top == guess and outcome.bottom == bottom,
            outcome.bottom == guess and outcome.top == top,
            outcome.won,
        ]
        assert effects.count(True) == 1, guess
        assert outcome.top < secret < outcome.bottom or outcome.won


def test_last_allowed_guess_loses():
    outcome = apply_guess("apple", "chair", "bingo", "bacon", guess_count=4, max_guesses=5)

    assert outcome.completed
    assert not outcome.won
    assert outcome.message == "Out of guesses! The word was BINGO."


def test_winning_on_last_guess_still_wins():
    outcome = apply_guess("apple", "chair", "bingo", "bingo", guess_count=4, max_guesses=5)
    assert outcome.won


def test_unlimited_guesses():
    outcome = apply_guess("apple", "chair", "bingo", "bacon", guess_count=500, max_guesses=0)
    assert not outcome.completed


def test_game_status():
    assert game_status(False, False) == IN_PROGRESS
    assert game_status(True, True) == WON
    assert game_status(True, False) == LOST


@pytest.mark.parametrize("raw", ["zz", "toolong", "ab1de", "", "   "])
def test_guess_shape(raw):
    with pytest.raises(GuessValidationError) as exc:
        check_guess_shape(normalize_word(raw))
    assert exc.value.message == "Guess must be 5 letters"


def test_normalize_word():
    assert normalize_word("  MaNgO ") == "mango"
