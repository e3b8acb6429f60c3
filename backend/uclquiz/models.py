from enum import Enum
from typing import List, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone

Difficulty = Literal["easy", "medium", "hard"]

# idle -> active -> resolved -> active ... -> resolved -> complete
SessionPhase = Literal["idle", "active", "resolved", "complete"]

OPTION_COUNT = 4


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Question(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    question: str
    options: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer: int = Field(ge=0, lt=OPTION_COUNT)
    difficulty: Difficulty

    @field_validator("options")
    @classmethod
    def _options_not_blank(cls, value: List[str]) -> List[str]:
        if any(not option.strip() for option in value):
            raise ValueError("options must not be blank")
        return value

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]


class LeaderboardEntry(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int
    player_name: str
    score: int
    total_questions: int
    time_in_seconds: int
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SKIPPED = "skipped"
    TIMED_OUT = "timed_out"

    @property
    def is_correct(self) -> bool:
        return self is Outcome.CORRECT


class SessionResult(CamelModel):
    """Final numbers of a completed session, used for the results screen and submission."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    score: int
    total_questions: int
    time_in_seconds: int
