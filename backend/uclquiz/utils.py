from typing import Iterable, List

from .db import settings
from .models import LeaderboardEntry


class NameValidationError(ValueError):
    """Raised for a player name that cannot be put on the leaderboard."""

    field = "player_name"


def sort_leaderboard(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    return sorted(entries, key=lambda e: (-e.score, e.time_in_seconds))


def format_time(seconds: int) -> str:
    minutes, remaining = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{remaining:02d}"


def validate_player_name(name: str, max_length: int | None = None) -> str:
    """Return the trimmed name or raise NameValidationError."""
    max_length = max_length or settings.MAX_PLAYER_NAME_LENGTH
    trimmed = (name or "").strip()
    if not trimmed:
        raise NameValidationError("Please enter your name")
    if len(trimmed) > max_length:
        raise NameValidationError(f"Name must be {max_length} characters or less")
    return trimmed
