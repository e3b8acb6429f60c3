"""Async HTTP client for the quiz API."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from .db import settings
from .models import LeaderboardEntry, Question
from .questions import BACKUP_QUESTIONS
from .schemas import LeaderboardEntryIn

logger = logging.getLogger(__name__)

_questions_adapter = TypeAdapter(List[Question])
_leaderboard_adapter = TypeAdapter(List[LeaderboardEntry])


class QuizApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SubmissionError(QuizApiError):
    """The leaderboard did not accept a result. Safe to retry."""


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if isinstance(detail, str) and detail:
            return detail
    return fallback


class QuizApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SEC
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def fetch_questions(self) -> List[Question]:
        """Questions from the server, or the built-in backup set if they cannot be loaded."""
        try:
            async with self._client() as client:
                response = await client.get("/api/questions")
                response.raise_for_status()
                questions = _questions_adapter.validate_python(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.warning("Failed to fetch questions, using backup questions instead: %s", exc)
            return list(BACKUP_QUESTIONS)

        if not questions:
            logger.warning("Server returned no questions, using backup questions instead")
            return list(BACKUP_QUESTIONS)
        return questions

    async def list_leaderboard(self) -> List[LeaderboardEntry]:
        try:
            async with self._client() as client:
                response = await client.get("/api/leaderboard")
        except httpx.HTTPError as exc:
            raise QuizApiError(f"Failed to fetch leaderboard: {exc}") from exc

        if not response.is_success:
            raise QuizApiError(
                _error_message(response, "Failed to fetch leaderboard"), response.status_code
            )
        try:
            return _leaderboard_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as exc:
            raise QuizApiError(f"Malformed leaderboard response: {exc}") from exc

    async def submit_result(self, entry: LeaderboardEntryIn) -> LeaderboardEntry:
        try:
            async with self._client() as client:
                response = await client.post(
                    "/api/leaderboard", json=entry.model_dump(mode="json", by_alias=True)
                )
        except httpx.HTTPError as exc:
            raise SubmissionError(f"Failed to submit score: {exc}") from exc

        if response.status_code != 201:
            message = _error_message(response, "Failed to submit score")
            logger.warning("Score submission rejected: status=%s message=%s", response.status_code, message)
            raise SubmissionError(message, response.status_code)

        try:
            return LeaderboardEntry.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SubmissionError(f"Malformed submission response: {exc}") from exc
