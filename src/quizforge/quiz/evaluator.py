"""Answer evaluation: per-question correctness and the aggregate score.

The exported artifact's behavior script (``export/resources/behavior.js``)
implements the same rules in JavaScript; both sides must agree on every
quiz and answer state, so change them together.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet

from .models import AnswerState, Question, Quiz, Result

__all__ = [
    "OptionMark",
    "OptionStatus",
    "classify_option",
    "evaluate",
    "format_score",
    "grade",
    "question_outcomes",
    "score",
]

_EMPTY: frozenset[int] = frozenset()


def evaluate(question: Question, selected: AbstractSet[int]) -> bool:
    """Return True when ``selected`` is exactly the set of correct options."""

    correct = question.correct_indices
    assert correct, "question has no correct option"
    return len(correct) == len(selected) and correct <= selected


def question_outcomes(quiz: Quiz, answer_state: AnswerState) -> list[bool]:
    return [
        evaluate(question, answer_state.get(index, _EMPTY))
        for index, question in enumerate(quiz.questions)
    ]


def score(quiz: Quiz, answer_state: AnswerState) -> float:
    """Percentage of questions answered exactly right, in ``[0, 100]``."""

    total = quiz.question_count
    correct = sum(question_outcomes(quiz, answer_state))
    return 100 * correct / total


def grade(quiz: Quiz, answer_state: AnswerState) -> Result:
    """Score ``answer_state``; indices outside the quiz raise ``ValueError``."""

    for index, picks in answer_state.items():
        if not 0 <= index < quiz.question_count:
            raise ValueError(f"No question {index} in quiz {quiz.id}.")
        option_count = len(quiz.questions[index].options)
        unknown = sorted(pick for pick in picks if not 0 <= pick < option_count)
        if unknown:
            raise ValueError(f"Question {index} has no option {unknown[0]}.")
    frozen = {index: frozenset(picks) for index, picks in answer_state.items()}
    return Result(answer_state=frozen, score=score(quiz, frozen))


def format_score(value: float) -> str:
    """Whole-percent display with halves rounded up, like ``Math.round``."""

    return f"{math.floor(value + 0.5)}%"


class OptionStatus(str, Enum):
    CORRECT_SELECTED = "correct-selected"
    CORRECT_MISSED = "correct-missed"
    INCORRECT_SELECTED = "incorrect-selected"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class OptionMark:
    status: OptionStatus
    css_classes: tuple[str, ...]
    marker: str


_MARKS = {
    OptionStatus.CORRECT_SELECTED: OptionMark(
        OptionStatus.CORRECT_SELECTED, ("correct", "user-choice"), "✅"
    ),
    OptionStatus.CORRECT_MISSED: OptionMark(
        OptionStatus.CORRECT_MISSED, ("correct",), "✅"
    ),
    OptionStatus.INCORRECT_SELECTED: OptionMark(
        OptionStatus.INCORRECT_SELECTED, ("incorrect", "user-choice"), "❌"
    ),
    OptionStatus.NEUTRAL: OptionMark(OptionStatus.NEUTRAL, (), ""),
}


def classify_option(is_correct: bool, selected: bool) -> OptionMark:
    if is_correct:
        status = (
            OptionStatus.CORRECT_SELECTED
            if selected
            else OptionStatus.CORRECT_MISSED
        )
    elif selected:
        status = OptionStatus.INCORRECT_SELECTED
    else:
        status = OptionStatus.NEUTRAL
    return _MARKS[status]
