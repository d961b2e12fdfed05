from datetime import date

from ..config import settings
from ..schemas import GameState

DIRECTION_EMOJI = {
    "up": "⬆️",
    "down": "⬇️",
    "win": "✅",
}
FALLBACK_EMOJI = "🔍"


def puzzle_number(day: date, launch: date) -> int:
    """Launch day is puzzle #1."""
    return (day - launch).days + 1


def format_day(day: date) -> str:
    # "Oct 16, 2026"
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def build_share_text(state: GameState, day: date) -> str:
    """
    Shareable summary of a finished game:
    title line, direction trail, result line, link.
    """
    count = len(state.guesses)
    trail = " ".join(DIRECTION_EMOJI.get(d, FALLBACK_EMOJI) for d in state.guess_directions)
    if not trail:
        trail = FALLBACK_EMOJI * count

    result = "Solved" if state.won else "Unsolved"
    result_emoji = "🎯" if state.won else "🤔"
    noun = "guess" if count == 1 else "guesses"

    number = puzzle_number(day, settings.LAUNCH_DATE)
    return (
        f"{settings.GAME_NAME} #{number} 📅 {format_day(day)}\n"
        f"\n"
        f"{trail}\n"
        f"\n"
        f"{result} in {count} {noun}! {result_emoji}\n"
        f"\n"
        f"Play at {settings.SHARE_URL}"
    )
