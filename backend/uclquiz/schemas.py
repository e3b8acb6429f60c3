from pydantic import Field, StrictInt, field_validator, model_validator

from .db import settings
from .models import CamelModel


class LeaderboardEntryIn(CamelModel):
    player_name: str
    score: StrictInt = Field(ge=0)
    total_questions: StrictInt = Field(ge=1)
    time_in_seconds: StrictInt = Field(ge=0)

    @field_validator("player_name")
    @classmethod
    def _check_player_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("player name must not be empty")
        if len(name) > settings.MAX_PLAYER_NAME_LENGTH:
            raise ValueError(f"player name must be {settings.MAX_PLAYER_NAME_LENGTH} characters or less")
        return name

    @model_validator(mode="after")
    def _score_within_total(self):
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed total questions")
        return self


class ApiMessage(CamelModel):
    detail: str
