from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .db import settings
from .effects import NullEffects, QuizEffects, play_safely
from .models import Outcome, Question, SessionPhase, SessionResult
from .timer import Countdown, SessionClock

logger = logging.getLogger(__name__)


class QuizSessionController:
    """State machine for one player working through a question set.

    Every question is resolved exactly once, by an answer, a skip or the
    countdown running out, whichever arrives first. ``advance()`` is the only
    way to move to the next question.
    """

    def __init__(
        self,
        effects: Optional[QuizEffects] = None,
        time_limit: Optional[int] = None,
        low_time_threshold: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.effects: QuizEffects = effects or NullEffects()
        self.time_limit = settings.QUESTION_TIME_LIMIT_SEC if time_limit is None else time_limit
        self.low_time_threshold = (
            settings.LOW_TIME_THRESHOLD_SEC if low_time_threshold is None else low_time_threshold
        )
        self._session_clock = SessionClock(clock) if clock else SessionClock()
        self._countdown = self._new_countdown()

        self._questions: List[Question] = []
        self._outcomes: List[Optional[Outcome]] = []
        self._selected: List[Optional[int]] = []
        self._phase: SessionPhase = "idle"
        self._index = 0
        self._score = 0
        self._result: Optional[SessionResult] = None
        self._generation = 0

    def _new_countdown(self) -> Countdown:
        return Countdown(self.time_limit, self.low_time_threshold)

    # -- read-only state ------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Optional[Question]:
        if self._phase in ("active", "resolved"):
            return self._questions[self._index]
        return None

    @property
    def is_last_question(self) -> bool:
        return bool(self._questions) and self._index == len(self._questions) - 1

    @property
    def score(self) -> int:
        return self._score

    @property
    def time_left(self) -> int:
        return self._countdown.remaining

    @property
    def is_low_time(self) -> bool:
        return self._phase == "active" and self._countdown.is_low_time

    @property
    def timer_running(self) -> bool:
        return self._countdown.running

    @property
    def outcomes(self) -> List[Optional[Outcome]]:
        return list(self._outcomes)

    @property
    def current_outcome(self) -> Optional[Outcome]:
        if self._phase in ("active", "resolved"):
            return self._outcomes[self._index]
        return None

    @property
    def selected_option(self) -> Optional[int]:
        if self._phase in ("active", "resolved"):
            return self._selected[self._index]
        return None

    @property
    def elapsed_seconds(self) -> int:
        return self._session_clock.elapsed_seconds

    @property
    def result(self) -> Optional[SessionResult]:
        return self._result

    # -- transitions ----------------------------------------------------------

    def start_session(self, questions: Sequence[Question]) -> None:
        if not questions:
            raise ValueError("Cannot start a session without questions")

        self._countdown.cancel()
        self._questions = list(questions)
        self._outcomes = [None] * len(self._questions)
        self._selected = [None] * len(self._questions)
        self._index = 0
        self._score = 0
        self._result = None
        self._generation += 1
        self._session_clock.start()
        self._activate()
        logger.info("session %s started with %s questions", self._generation, len(self._questions))

    def reset(self) -> None:
        """Abandon the current session and return to idle."""
        self._countdown.cancel()
        self._session_clock.stop()
        self._phase = "idle"
        self._generation += 1

    def tick(self) -> Optional[int]:
        """One second elapsed. Returns the remaining time, or None if nothing was counting."""
        if self._phase != "active":
            return None
        previous = self._countdown.remaining
        remaining = self._countdown.tick()
        if remaining is None:
            return None
        if remaining == 0:
            self._resolve(Outcome.TIMED_OUT)
        elif previous <= self.low_time_threshold:
            # keyed on the second shown before the decrement
            play_safely(self.effects.play_tick)
        return remaining

    def select_answer(self, option_index: int) -> Optional[Outcome]:
        if not self._can_resolve():
            return None
        question = self._questions[self._index]
        outcome = Outcome.CORRECT if option_index == question.correct_answer else Outcome.INCORRECT
        self._selected[self._index] = option_index
        self._resolve(outcome)
        return outcome

    def skip(self) -> Optional[Outcome]:
        if not self._can_resolve():
            return None
        self._resolve(Outcome.SKIPPED)
        return Outcome.SKIPPED

    def advance(self) -> SessionPhase:
        if self._phase != "resolved":
            return self._phase

        if self._index < len(self._questions) - 1:
            self._index += 1
            self._activate()
        else:
            self._complete()
        return self._phase

    # -- internals ------------------------------------------------------------

    def _can_resolve(self) -> bool:
        return self._phase == "active" and self._outcomes[self._index] is None

    def _activate(self) -> None:
        self._countdown = self._new_countdown()
        self._countdown.start()
        self._phase = "active"

    def _resolve(self, outcome: Outcome) -> None:
        # single guard shared by answer, skip and timeout
        if not self._can_resolve():
            return
        self._countdown.cancel()
        self._outcomes[self._index] = outcome
        if outcome.is_correct:
            self._score += 1
        self._phase = "resolved"
        logger.debug("question %s resolved as %s", self._index, outcome.value)

        if outcome.is_correct:
            play_safely(self.effects.play_correct)
        else:
            play_safely(self.effects.play_incorrect)

    def _complete(self) -> None:
        self._countdown.cancel()
        self._session_clock.stop()
        self._phase = "complete"
        self._result = SessionResult(
            score=self._score,
            total_questions=len(self._questions),
            time_in_seconds=self._session_clock.elapsed_seconds,
        )
        logger.info(
            "session %s complete: %s/%s in %ss",
            self._generation,
            self._result.score,
            self._result.total_questions,
            self._result.time_in_seconds,
        )
        play_safely(self.effects.play_success)
