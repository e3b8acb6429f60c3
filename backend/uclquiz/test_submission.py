from __future__ import annotations

import asyncio
from unittest import IsolatedAsyncioTestCase, mock

from .client import SubmissionError
from .models import LeaderboardEntry, SessionResult
from .submission import ResultSubmission
from .utils import NameValidationError

_RESULT = SessionResult(score=6, total_questions=10, time_in_seconds=140)


def _created(payload) -> LeaderboardEntry:
    return LeaderboardEntry(id=1, **payload.model_dump())


class ResultSubmissionTests(IsolatedAsyncioTestCase):
    async def test_invalid_name_makes_no_call(self):
        submit = mock.AsyncMock()
        submission = ResultSubmission(_RESULT, submit)

        for name in ("", "   ", "y" * 16):
            with self.assertRaises(NameValidationError):
                await submission.submit(name)

        submit.assert_not_awaited()
        self.assertEqual(submission.attempts, 0)

    async def test_success_sends_session_numbers_once(self):
        submit = mock.AsyncMock(side_effect=_created)
        submission = ResultSubmission(_RESULT, submit)

        status = await submission.submit(" Maldini ")

        self.assertTrue(status.ok)
        submit.assert_awaited_once()
        payload = submit.await_args.args[0]
        self.assertEqual(payload.player_name, "Maldini")
        self.assertEqual((payload.score, payload.total_questions, payload.time_in_seconds), (6, 10, 140))
        self.assertTrue(submission.submitted)

        self.assertIsNone(await submission.submit("Maldini"))
        submit.assert_awaited_once()

    async def test_failure_is_retryable_and_keeps_result(self):
        submit = mock.AsyncMock(side_effect=SubmissionError("Failed to create leaderboard entry", 500))
        submission = ResultSubmission(_RESULT, submit)

        failed = await submission.submit("Pirlo")

        self.assertFalse(failed.ok)
        self.assertEqual(failed.error, "Failed to create leaderboard entry")
        self.assertEqual(submission.last_error, "Failed to create leaderboard entry")
        self.assertFalse(submission.submitted)
        self.assertEqual(submission.result, _RESULT)

        submit.side_effect = _created
        retried = await submission.submit("Pirlo")

        self.assertTrue(retried.ok)
        self.assertIsNone(submission.last_error)
        self.assertEqual(submission.attempts, 2)

    async def test_duplicate_submit_while_in_flight_is_ignored(self):
        release = asyncio.Event()

        async def slow_submit(payload):
            await release.wait()
            return _created(payload)

        submission = ResultSubmission(_RESULT, slow_submit)
        first = asyncio.create_task(submission.submit("Xavi"))
        await asyncio.sleep(0)

        self.assertTrue(submission.in_flight)
        self.assertIsNone(await submission.submit("Xavi"))

        release.set()
        status = await first
        self.assertTrue(status.ok)
        self.assertEqual(submission.attempts, 1)
