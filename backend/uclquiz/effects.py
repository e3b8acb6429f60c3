from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class QuizEffects(Protocol):
    """Sound/visual feedback triggered by session transitions. Return values are ignored."""

    def play_correct(self) -> None: ...

    def play_incorrect(self) -> None: ...

    def play_tick(self) -> None: ...

    def play_success(self) -> None: ...


class NullEffects:
    """Muted session."""

    def play_correct(self) -> None:
        pass

    def play_incorrect(self) -> None:
        pass

    def play_tick(self) -> None:
        pass

    def play_success(self) -> None:
        pass


class LoggingEffects:
    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def _log(self, name: str) -> None:
        logger.log(self.level, "effect: %s", name)

    def play_correct(self) -> None:
        self._log("correct")

    def play_incorrect(self) -> None:
        self._log("incorrect")

    def play_tick(self) -> None:
        self._log("tick")

    def play_success(self) -> None:
        self._log("success")


def play_safely(effect: Callable[[], object]) -> None:
    try:
        effect()
    except Exception:
        logger.exception("Error playing sound effect %s", getattr(effect, "__name__", effect))
