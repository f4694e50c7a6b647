"""Builders for quiz objects used across the suite."""

from __future__ import annotations

import json
from typing import Any, Sequence

from quizforge.quiz.models import (
    ExamSettings,
    Option,
    Question,
    QuestionType,
    Quiz,
)


def single(text: str, correct: int, options: Sequence[str]) -> Question:
    return Question(
        text=text,
        type=QuestionType.SINGLE_SELECT,
        options=tuple(
            Option(label, index == correct, f"Because {label}.")
            for index, label in enumerate(options)
        ),
    )


def multi(text: str, correct: Sequence[int], options: Sequence[str]) -> Question:
    return Question(
        text=text,
        type=QuestionType.MULTI_SELECT,
        options=tuple(
            Option(label, index in correct, f"Because {label}.")
            for index, label in enumerate(options)
        ),
    )


def make_quiz(
    *questions: Question,
    quiz_id: str = "20240101T000000000000Z",
    title: str = "Python Basics Quiz",
    topic: str = "Python Basics",
    timer_minutes: int = 0,
    assistant_enabled: bool = True,
) -> Quiz:
    if not questions:
        questions = (
            single("Which keyword defines a function?", 1, ["fn", "def", "fun"]),
            multi("Which are immutable?", (0, 2), ["tuple", "list", "str", "dict"]),
            single("What does len([]) return?", 0, ["0", "None", "1"]),
            multi("Which are loops?", (0, 1), ["for", "while", "if"]),
        )
    return Quiz(
        id=quiz_id,
        title=title,
        topic=topic,
        questions=tuple(questions),
        settings=ExamSettings(
            timer_minutes=timer_minutes, assistant_enabled=assistant_enabled
        ),
        created_at=1704067200.0,
    )


def generation_payload(questions: int = 2, **overrides: Any) -> str:
    """JSON text shaped like a model's quiz response."""

    items = []
    for index in range(questions):
        items.append(
            {
                "questionText": f"Question {index + 1}?",
                "questionType": "SINGLE_SELECT" if index % 2 == 0 else "MULTI_SELECT",
                "options": [
                    {"optionText": "A", "isCorrect": True, "explanation": "A is right."},
                    {"optionText": "B", "isCorrect": index % 2 == 1, "explanation": "B."},
                    {"optionText": "C", "isCorrect": False, "explanation": "C is wrong."},
                ],
            }
        )
    payload = {"title": "Generated Quiz", "topic": "Testing", "questions": items}
    payload.update(overrides)
    return json.dumps(payload)
