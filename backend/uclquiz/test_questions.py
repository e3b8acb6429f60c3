import random
from unittest import TestCase

from .models import Question
from .questions import (
    BACKUP_QUESTIONS,
    DEFAULT_QUESTIONS,
    feedback_text,
    sample_random,
    score_message,
    sort_by_difficulty,
    star_count,
)


def _question(qid: int, difficulty: str) -> Question:
    return Question(id=qid, question=f"Q{qid}", options=["a", "b", "c", "d"], correct_answer=0, difficulty=difficulty)


class SortByDifficultyTests(TestCase):
    def test_orders_tiers_and_keeps_relative_order(self):
        questions = [
            _question(1, "hard"),
            _question(2, "easy"),
            _question(3, "medium"),
            _question(4, "easy"),
            _question(5, "hard"),
            _question(6, "medium"),
        ]

        ordered = sort_by_difficulty(questions)

        self.assertEqual([q.id for q in ordered], [2, 4, 3, 6, 1, 5])
        self.assertEqual([q.id for q in questions], [1, 2, 3, 4, 5, 6])

    def test_is_idempotent(self):
        questions = [Question(id=i + 1, **data) for i, data in enumerate(DEFAULT_QUESTIONS)]
        once = sort_by_difficulty(questions)
        self.assertEqual(sort_by_difficulty(once), once)


class SampleRandomTests(TestCase):
    def test_takes_requested_count_without_repeats(self):
        questions = [_question(i, "easy") for i in range(1, 11)]

        sample = sample_random(questions, 4, rng=random.Random(7))

        self.assertEqual(len(sample), 4)
        self.assertEqual(len({q.id for q in sample}), 4)
        self.assertTrue({q.id for q in sample} <= {q.id for q in questions})

    def test_caps_at_available_questions(self):
        questions = [_question(i, "easy") for i in range(1, 4)]

        sample = sample_random(questions, 15, rng=random.Random(1))

        self.assertEqual(sorted(q.id for q in sample), [1, 2, 3])
        self.assertEqual([q.id for q in questions], [1, 2, 3])

    def test_same_seed_same_draw(self):
        questions = [_question(i, "easy") for i in range(1, 21)]
        first = sample_random(questions, 5, rng=random.Random(42))
        second = sample_random(questions, 5, rng=random.Random(42))
        self.assertEqual(first, second)


class ScoreHelperTests(TestCase):
    def test_feedback_text_names_correct_option(self):
        self.assertEqual(feedback_text(BACKUP_QUESTIONS[1]), "Cristiano Ronaldo is the correct answer.")

    def test_star_count_thresholds(self):
        self.assertEqual(star_count(9, 10), 5)
        self.assertEqual(star_count(7, 10), 4)
        self.assertEqual(star_count(5, 10), 3)
        self.assertEqual(star_count(3, 10), 2)
        self.assertEqual(star_count(2, 10), 1)

    def test_score_message(self):
        self.assertIn("expert", score_message(20, 20))
        self.assertIn("Keep learning", score_message(0, 20))

    def test_builtin_sets_are_valid(self):
        self.assertEqual(len(DEFAULT_QUESTIONS), 20)
        self.assertEqual(len(BACKUP_QUESTIONS), 5)
        for data in DEFAULT_QUESTIONS:
            Question(id=1, **data)
