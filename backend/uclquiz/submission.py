from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .client import SubmissionError
from .models import LeaderboardEntry, SessionResult
from .schemas import LeaderboardEntryIn
from .utils import validate_player_name

logger = logging.getLogger(__name__)

SubmitFn = Callable[[LeaderboardEntryIn], Awaitable[LeaderboardEntry]]


@dataclass(slots=True)
class SubmissionStatus:
    ok: bool
    entry: Optional[LeaderboardEntry] = None
    error: Optional[str] = None


class ResultSubmission:
    """Sends one finished session to the leaderboard.

    Names are checked locally first. While a request is in flight further
    submits are ignored; after a failure the same result can be retried, and
    after a success nothing more is sent.
    """

    def __init__(self, result: SessionResult, submit: SubmitFn):
        self.result = result
        self._submit = submit
        self.in_flight = False
        self.entry: Optional[LeaderboardEntry] = None
        self.last_error: Optional[str] = None
        self.attempts = 0

    @property
    def submitted(self) -> bool:
        return self.entry is not None

    def validate(self, name: str) -> str:
        return validate_player_name(name)

    def build_entry(self, name: str) -> LeaderboardEntryIn:
        return LeaderboardEntryIn(
            player_name=self.validate(name),
            score=self.result.score,
            total_questions=self.result.total_questions,
            time_in_seconds=self.result.time_in_seconds,
        )

    async def submit(self, name: str) -> Optional[SubmissionStatus]:
        """Raises NameValidationError for a bad name; returns None when nothing was sent."""
        payload = self.build_entry(name)
        if self.in_flight or self.submitted:
            return None

        self.in_flight = True
        self.attempts += 1
        try:
            entry = await self._submit(payload)
        except SubmissionError as exc:
            self.last_error = exc.message
            logger.warning("Failed to submit score for %s: %s", payload.player_name, exc.message)
            return SubmissionStatus(ok=False, error=exc.message)
        finally:
            self.in_flight = False

        self.entry = entry
        self.last_error = None
        logger.info("Score %s/%s submitted for %s", entry.score, entry.total_questions, entry.player_name)
        return SubmissionStatus(ok=True, entry=entry)
