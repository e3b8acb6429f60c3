"""Question data and the ordering/sampling helpers used to build a quiz."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence

from .models import Question

DIFFICULTY_RANK: Dict[str, int] = {"easy": 1, "medium": 2, "hard": 3}


# Seeded into the repository when the server starts with an empty question table.
DEFAULT_QUESTIONS: List[Dict[str, Any]] = [
    {
        "question": "Which team has won the most UEFA Champions League titles?",
        "options": ["Real Madrid", "Barcelona", "Bayern Munich", "Liverpool"],
        "correct_answer": 0,
        "difficulty": "easy",
    },
    {
        "question": "Who is the all-time top scorer in the UEFA Champions League?",
        "options": ["Lionel Messi", "Cristiano Ronaldo", "Robert Lewandowski", "Karim Benzema"],
        "correct_answer": 1,
        "difficulty": "easy",
    },
    {
        "question": "In which city was the first European Cup final played in 1956?",
        "options": ["Paris", "Madrid", "London", "Rome"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which player has won the most Champions League titles?",
        "options": ["Cristiano Ronaldo", "Paco Gento", "Lionel Messi", "Paolo Maldini"],
        "correct_answer": 1,
        "difficulty": "medium",
    },
    {
        "question": "In which season was the European Cup rebranded as the UEFA Champions League?",
        "options": ["1990/91", "1991/92", "1992/93", "1995/96"],
        "correct_answer": 2,
        "difficulty": "medium",
    },
    {
        "question": "Which club won the first European Cup in 1956?",
        "options": ["Real Madrid", "Benfica", "AC Milan", "Bayern Munich"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which team has appeared in the most European Cup/Champions League finals?",
        "options": ["Real Madrid", "Bayern Munich", "AC Milan", "Liverpool"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Who scored the winning goal for Chelsea in the 2012 Champions League final?",
        "options": ["Didier Drogba", "Frank Lampard", "Fernando Torres", "Juan Mata"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which player scored the fastest goal in Champions League history?",
        "options": ["Roy Makaay", "Alessandro Del Piero", "Raúl", "David Alaba"],
        "correct_answer": 0,
        "difficulty": "hard",
    },
    {
        "question": "Which team completed the treble (domestic league, domestic cup, and Champions League) in the 1998-99 season?",
        "options": ["Manchester United", "Bayern Munich", "Barcelona", "Inter Milan"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which was the first team to win the Champions League undefeated?",
        "options": ["Manchester United", "Barcelona", "AC Milan", "Ajax"],
        "correct_answer": 2,
        "difficulty": "hard",
    },
    {
        "question": "Who is the only player to win the Champions League with three different clubs?",
        "options": ["Clarence Seedorf", "Cristiano Ronaldo", "Zlatan Ibrahimović", "Thiago Alcântara"],
        "correct_answer": 0,
        "difficulty": "hard",
    },
    {
        "question": "Which team came back from 3-0 down to win the 2005 Champions League final?",
        "options": ["Liverpool", "Real Madrid", "Barcelona", "AC Milan"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Who scored Real Madrid's 93rd-minute equalizing goal in the 2014 Champions League final?",
        "options": ["Cristiano Ronaldo", "Gareth Bale", "Sergio Ramos", "Karim Benzema"],
        "correct_answer": 2,
        "difficulty": "hard",
    },
    {
        "question": "Which manager has won the most Champions League titles?",
        "options": ["Carlo Ancelotti", "Alex Ferguson", "Pep Guardiola", "José Mourinho"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which team beat Barcelona 8-2 in the 2020 Champions League quarter-finals?",
        "options": ["Bayern Munich", "Liverpool", "PSG", "Manchester City"],
        "correct_answer": 0,
        "difficulty": "easy",
    },
    {
        "question": "Who was the first English player to win the Champions League with a foreign club?",
        "options": ["Steve McManaman", "David Beckham", "Owen Hargreaves", "Gary Lineker"],
        "correct_answer": 0,
        "difficulty": "hard",
    },
    {
        "question": "Which goalkeeper holds the record for most clean sheets in Champions League history?",
        "options": ["Iker Casillas", "Gianluigi Buffon", "Manuel Neuer", "Petr Čech"],
        "correct_answer": 0,
        "difficulty": "medium",
    },
    {
        "question": "Which was the first team to retain the Champions League in its modern format?",
        "options": ["AC Milan", "Barcelona", "Real Madrid", "Manchester United"],
        "correct_answer": 2,
        "difficulty": "medium",
    },
    {
        "question": "Which team won the Champions League in 2018, 2016, and 2017?",
        "options": ["Barcelona", "Real Madrid", "Liverpool", "Bayern Munich"],
        "correct_answer": 1,
        "difficulty": "easy",
    },
]


# Served locally when the question endpoint cannot be reached.
BACKUP_QUESTIONS: List[Question] = [
    Question(
        id=1,
        question="Which team has won the most UEFA Champions League titles?",
        options=["Real Madrid", "Barcelona", "Bayern Munich", "Liverpool"],
        correct_answer=0,
        difficulty="easy",
    ),
    Question(
        id=2,
        question="Who is the all-time top scorer in the UEFA Champions League?",
        options=["Lionel Messi", "Cristiano Ronaldo", "Robert Lewandowski", "Karim Benzema"],
        correct_answer=1,
        difficulty="easy",
    ),
    Question(
        id=3,
        question="Which player has won the most Champions League titles?",
        options=["Cristiano Ronaldo", "Paco Gento", "Lionel Messi", "Paolo Maldini"],
        correct_answer=1,
        difficulty="medium",
    ),
    Question(
        id=4,
        question="In which season was the European Cup rebranded as the UEFA Champions League?",
        options=["1990/91", "1991/92", "1992/93", "1995/96"],
        correct_answer=2,
        difficulty="medium",
    ),
    Question(
        id=5,
        question="Which club won the first European Cup in 1956?",
        options=["Real Madrid", "Benfica", "AC Milan", "Bayern Munich"],
        correct_answer=0,
        difficulty="medium",
    ),
]


def sort_by_difficulty(questions: Sequence[Question]) -> List[Question]:
    # sorted() is stable, so ties keep their incoming order
    return sorted(questions, key=lambda q: DIFFICULTY_RANK[q.difficulty])


def sample_random(
    questions: Sequence[Question], count: int, rng: Optional[random.Random] = None
) -> List[Question]:
    """Return ``count`` questions (or all of them, if fewer) in uniformly random order.

    The input is never modified. Pass ``rng`` for reproducible draws.
    """
    rng = rng or random.Random()
    pool = list(questions)
    for i in range(len(pool) - 1, 0, -1):
        j = rng.randint(0, i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[: max(0, min(count, len(pool)))]


def feedback_text(question: Question) -> str:
    return f"{question.correct_option} is the correct answer."


def _percentage(score: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return score / total * 100


def score_message(score: int, total: int) -> str:
    percentage = _percentage(score, total)
    if percentage >= 90:
        return "Outstanding! You're a Champions League expert!"
    if percentage >= 70:
        return "Great job! You really know your Champions League facts!"
    if percentage >= 50:
        return "Not bad! You have decent knowledge of the Champions League."
    return "Keep learning! The Champions League has a rich history to explore."


def star_count(score: int, total: int) -> int:
    percentage = _percentage(score, total)
    if percentage >= 90:
        return 5
    if percentage >= 70:
        return 4
    if percentage >= 50:
        return 3
    if percentage >= 30:
        return 2
    return 1
