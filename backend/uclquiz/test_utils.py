from unittest import TestCase

from .models import LeaderboardEntry
from .utils import NameValidationError, format_time, sort_leaderboard, validate_player_name


class ValidatePlayerNameTests(TestCase):
    def test_empty_name_rejected(self):
        with self.assertRaises(NameValidationError) as ctx:
            validate_player_name("")
        self.assertEqual(str(ctx.exception), "Please enter your name")

    def test_whitespace_name_rejected(self):
        with self.assertRaises(NameValidationError):
            validate_player_name("   ")

    def test_sixteen_characters_rejected(self):
        with self.assertRaises(NameValidationError) as ctx:
            validate_player_name("a" * 16)
        self.assertEqual(str(ctx.exception), "Name must be 15 characters or less")

    def test_fifteen_characters_accepted(self):
        self.assertEqual(validate_player_name("b" * 15), "b" * 15)

    def test_name_is_trimmed(self):
        self.assertEqual(validate_player_name("  Kaka "), "Kaka")


class SortLeaderboardTests(TestCase):
    def test_score_desc_then_time_asc(self):
        a = LeaderboardEntry(id=1, player_name="A", score=9, total_questions=10, time_in_seconds=100)
        b = LeaderboardEntry(id=2, player_name="B", score=9, total_questions=10, time_in_seconds=80)
        c = LeaderboardEntry(id=3, player_name="C", score=10, total_questions=10, time_in_seconds=200)

        ordered = sort_leaderboard([a, b, c])

        self.assertEqual([e.player_name for e in ordered], ["C", "B", "A"])


class FormatTimeTests(TestCase):
    def test_minutes_and_padded_seconds(self):
        self.assertEqual(format_time(0), "0:00")
        self.assertEqual(format_time(65), "1:05")
        self.assertEqual(format_time(600), "10:00")
