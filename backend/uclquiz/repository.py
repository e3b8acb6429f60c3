from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .db import db
from .models import LeaderboardEntry, Question
from .questions import DEFAULT_QUESTIONS
from .schemas import LeaderboardEntryIn
from .utils import sort_leaderboard


class QuizRepository:
    """Question and leaderboard tables with ids handed out by the repository."""

    def __init__(self, database: Any = None):
        self._db = database or db
        self.questions = self._db.questions
        self.leaderboard_entries = self._db.leaderboard_entries
        self.counters = self._db.counters

    async def _next_id(self, table: str) -> int:
        """Reserve the next integer id for ``table`` (ids start at 1)."""

        counter_doc = await self.counters.find_one_and_update(
            {"_id": table},
            {"$inc": {"seq": 1}},
            upsert=True,
        )
        if not counter_doc or "seq" not in counter_doc:
            raise RuntimeError(f"Could not allocate an id for {table}")
        return int(counter_doc["seq"])

    async def list_questions(self) -> List[Question]:
        docs = await self.questions.find({}).sort("id", 1).to_list()
        return [Question(**doc) for doc in docs]

    async def get_question(self, question_id: int) -> Optional[Question]:
        doc = await self.questions.find_one({"id": question_id})
        return Question(**doc) if doc else None

    async def create_question(self, data: Dict[str, Any]) -> Question:
        # Validate before reserving an id so bad input never leaves a gap or a row behind.
        Question(id=0, **data)
        question = Question(id=await self._next_id("questions"), **data)
        await self.questions.insert_one(question.model_dump())
        return question

    async def seed_questions(self, questions: Iterable[Dict[str, Any]] = DEFAULT_QUESTIONS) -> int:
        """Insert ``questions`` only when the table is empty; returns how many were added."""

        if await self.questions.count_documents({}):
            return 0
        added = 0
        for data in questions:
            await self.create_question(data)
            added += 1
        return added

    async def list_leaderboard(self) -> List[LeaderboardEntry]:
        docs = await self.leaderboard_entries.find({}).sort("id", 1).to_list()
        return sort_leaderboard(LeaderboardEntry(**doc) for doc in docs)

    async def create_leaderboard_entry(self, payload: LeaderboardEntryIn) -> LeaderboardEntry:
        entry = LeaderboardEntry(
            id=await self._next_id("leaderboard_entries"),
            **payload.model_dump(),
        )
        await self.leaderboard_entries.insert_one(entry.model_dump())
        return entry


repository = QuizRepository()
