from __future__ import annotations

from unittest import IsolatedAsyncioTestCase

from pydantic import ValidationError

from .db import InMemoryDatabase
from .questions import DEFAULT_QUESTIONS
from .repository import QuizRepository
from .schemas import LeaderboardEntryIn


def _entry(name: str, score: int, seconds: int, total: int = 10) -> LeaderboardEntryIn:
    return LeaderboardEntryIn(player_name=name, score=score, total_questions=total, time_in_seconds=seconds)


class QuizRepositoryTests(IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.repo = QuizRepository(InMemoryDatabase())

    async def test_seed_runs_once(self):
        self.assertEqual(await self.repo.seed_questions(), len(DEFAULT_QUESTIONS))
        self.assertEqual(await self.repo.seed_questions(), 0)

        questions = await self.repo.list_questions()
        self.assertEqual([q.id for q in questions], list(range(1, len(DEFAULT_QUESTIONS) + 1)))

    async def test_get_question(self):
        await self.repo.seed_questions()

        question = await self.repo.get_question(2)

        self.assertEqual(question.options[question.correct_answer], "Cristiano Ronaldo")
        self.assertIsNone(await self.repo.get_question(999))

    async def test_invalid_question_is_not_stored(self):
        with self.assertRaises(ValidationError):
            await self.repo.create_question(
                {"question": "Broken?", "options": ["a", "b"], "correct_answer": 0, "difficulty": "easy"}
            )
        self.assertEqual(await self.repo.list_questions(), [])

        created = await self.repo.create_question(DEFAULT_QUESTIONS[0])
        self.assertEqual(created.id, 1)

    async def test_leaderboard_ids_and_order(self):
        a = await self.repo.create_leaderboard_entry(_entry("A", 9, 100))
        b = await self.repo.create_leaderboard_entry(_entry("B", 9, 80))
        c = await self.repo.create_leaderboard_entry(_entry("C", 10, 200))

        self.assertEqual([a.id, b.id, c.id], [1, 2, 3])
        self.assertIsNotNone(a.date)

        listing = await self.repo.list_leaderboard()
        self.assertEqual([e.player_name for e in listing], ["C", "B", "A"])

    async def test_tables_use_independent_id_sequences(self):
        await self.repo.create_question(DEFAULT_QUESTIONS[0])
        entry = await self.repo.create_leaderboard_entry(_entry("Solo", 1, 5))
        self.assertEqual(entry.id, 1)
