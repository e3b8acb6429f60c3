from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Literal, Optional

from .client import QuizApiClient, QuizApiError
from .db import settings
from .effects import LoggingEffects, QuizEffects
from .game import QuizSessionController
from .models import LeaderboardEntry, Outcome, Question, SessionPhase
from .questions import feedback_text, sample_random, score_message, sort_by_difficulty, star_count
from .submission import ResultSubmission, SubmissionStatus
from .timer import Ticker
from .utils import format_time

logger = logging.getLogger(__name__)

Screen = Literal["start", "quiz", "results", "leaderboard"]

TickerFactory = Callable[[Callable[[], Optional[bool]]], Ticker]


class QuizRunner:
    """Host for a single player: screens, question loading, ticking and score submission."""

    def __init__(
        self,
        client: Optional[QuizApiClient] = None,
        effects: Optional[QuizEffects] = None,
        ticker_factory: Optional[TickerFactory] = None,
        controller: Optional[QuizSessionController] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client or QuizApiClient()
        self.controller = controller or QuizSessionController(effects=effects or LoggingEffects())
        self._ticker_factory: TickerFactory = ticker_factory or (lambda cb: Ticker(cb, 1.0))
        self._ticker: Optional[Ticker] = None
        self._rng = rng
        self.screen: Screen = "start"
        self.questions: List[Question] = []
        self.leaderboard: List[LeaderboardEntry] = []
        self.submission: Optional[ResultSubmission] = None
        self.notice: Optional[str] = None

    async def load_questions(self) -> List[Question]:
        questions = await self.client.fetch_questions()
        picked = sample_random(questions, settings.QUESTIONS_PER_SESSION, rng=self._rng)
        self.questions = sort_by_difficulty(picked)
        return self.questions

    async def start_quiz(self) -> None:
        if not self.questions:
            await self.load_questions()
        self._stop_ticker()
        self.controller.start_session(self.questions)
        self.submission = None
        self.notice = None
        self.screen = "quiz"
        self._start_ticker()

    def back_to_start(self) -> None:
        self._stop_ticker()
        if self.controller.phase in ("active", "resolved"):
            self.controller.reset()
        self.screen = "start"

    # -- quiz screen ----------------------------------------------------------

    def _on_tick(self) -> bool:
        self.controller.tick()
        if self.controller.phase != "active":
            self._ticker = None
            return False
        return True

    def _start_ticker(self) -> None:
        self._ticker = self._ticker_factory(self._on_tick)
        self._ticker.start()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def select_answer(self, option_index: int) -> Optional[Outcome]:
        outcome = self.controller.select_answer(option_index)
        if outcome is not None:
            self._stop_ticker()
        return outcome

    def skip(self) -> Optional[Outcome]:
        outcome = self.controller.skip()
        if outcome is not None:
            self._stop_ticker()
        return outcome

    def next_question(self) -> SessionPhase:
        phase = self.controller.advance()
        if phase == "active" and self._ticker is None:
            self._start_ticker()
        elif phase == "complete" and self.screen == "quiz":
            self._stop_ticker()
            self.submission = ResultSubmission(self.controller.result, self.client.submit_result)
            self.screen = "results"
        return phase

    def feedback(self) -> Optional[str]:
        """Banner shown under a resolved question."""
        outcome = self.controller.current_outcome
        question = self.controller.current_question
        if outcome is None or question is None:
            return None
        prefix = "Correct!" if outcome.is_correct else "Incorrect!"
        return f"{prefix} {feedback_text(question)}"

    def next_label(self) -> str:
        return "See Results" if self.controller.is_last_question else "Next Question"

    def results_summary(self) -> Optional[Dict[str, Any]]:
        result = self.controller.result
        if result is None:
            return None
        return {
            "score": result.score,
            "total_questions": result.total_questions,
            "time": format_time(result.time_in_seconds),
            "message": score_message(result.score, result.total_questions),
            "stars": star_count(result.score, result.total_questions),
        }

    # -- results / leaderboard ------------------------------------------------

    async def submit_name(self, name: str) -> Optional[SubmissionStatus]:
        """Submit the finished session. Raises NameValidationError for a bad name."""
        if self.submission is None:
            return None
        submission = self.submission
        generation = self.controller.generation
        status = await submission.submit(name)
        if status is None:
            return None

        # the user restarted or navigated away while the request was in flight
        if generation != self.controller.generation or self.screen != "results":
            logger.info("Discarding late submission response for session %s", generation)
            return None

        if status.ok:
            self.notice = "Your score has been added to the leaderboard"
            await self.show_leaderboard()
        else:
            self.notice = f"Failed to submit score: {status.error}"
        return status

    async def show_leaderboard(self) -> List[LeaderboardEntry]:
        self.screen = "leaderboard"
        try:
            entries = await self.client.list_leaderboard()
        except QuizApiError as exc:
            logger.warning("Failed to fetch leaderboard: %s", exc)
            self.notice = "Failed to fetch leaderboard"
            return self.leaderboard
        if self.screen == "leaderboard":
            self.leaderboard = entries
        return self.leaderboard
