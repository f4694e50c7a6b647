"""Quiz data model: options, questions, quizzes, answer state and results.

Entities are immutable. JSON (de)serialization uses camelCase keys so the
stored library and the exported data island share one vocabulary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

__all__ = [
    "AnswerState",
    "ExamSettings",
    "Option",
    "Question",
    "QuestionSet",
    "QuestionType",
    "Quiz",
    "QuizValidationError",
    "Result",
    "freeze_answers",
]

AnswerState = Mapping[int, frozenset[int]]

MAX_TIMER_MINUTES = 60


class QuizValidationError(ValueError):
    """Raised when quiz data violates the question invariants."""


def _require_mapping(payload: object, kind: str) -> None:
    if not isinstance(payload, Mapping):
        raise QuizValidationError(
            f"{kind} must be an object, not {type(payload).__name__}."
        )


class QuestionType(str, Enum):
    SINGLE_SELECT = "SINGLE_SELECT"
    MULTI_SELECT = "MULTI_SELECT"

    @classmethod
    def from_value(cls, value: object) -> "QuestionType":
        normalized = str(value or "").strip().upper().replace(" ", "_")
        aliases = {
            "MULTIPLE_CHOICE": cls.SINGLE_SELECT,
            "SINGLE": cls.SINGLE_SELECT,
            "MULTIPLE_SELECT": cls.MULTI_SELECT,
            "MULTI": cls.MULTI_SELECT,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError as exc:
            expected = ", ".join(member.value for member in cls)
            raise QuizValidationError(
                f"Unknown question type '{value}'. Expected one of: {expected}."
            ) from exc

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class Option:
    text: str
    is_correct: bool
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "isCorrect": self.is_correct,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Option":
        _require_mapping(payload, "Option")
        text = payload.get("text", payload.get("optionText"))
        if not isinstance(text, str) or not text.strip():
            raise QuizValidationError("Option text must be a non-empty string.")
        flag = payload.get("isCorrect", False)
        if not isinstance(flag, bool):
            raise QuizValidationError("Option isCorrect must be a boolean.")
        explanation = payload.get("explanation") or ""
        return cls(text=text.strip(), is_correct=flag, explanation=str(explanation))


@dataclass(frozen=True)
class Question:
    text: str
    type: QuestionType
    options: tuple[Option, ...]

    @property
    def correct_indices(self) -> frozenset[int]:
        return frozenset(
            index for index, option in enumerate(self.options) if option.is_correct
        )

    def validate(self) -> None:
        """Enforce the correct-option invariants for this question's type."""

        if not self.text.strip():
            raise QuizValidationError("Question text must not be empty.")
        if len(self.options) < 2:
            raise QuizValidationError("A question needs at least two options.")
        correct = len(self.correct_indices)
        if correct == 0:
            raise QuizValidationError(
                f"Question '{self.text[:60]}' has no correct option."
            )
        if self.type is QuestionType.SINGLE_SELECT and correct != 1:
            raise QuizValidationError(
                f"Single-select question '{self.text[:60]}' has {correct} "
                "correct options; expected exactly one."
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "questionType": self.type.value,
            "options": [option.to_dict() for option in self.options],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Question":
        _require_mapping(payload, "Question")
        text = payload.get("text", payload.get("questionText"))
        if not isinstance(text, str):
            raise QuizValidationError("Question text must be a string.")
        raw_options = payload.get("options")
        if not isinstance(raw_options, list):
            raise QuizValidationError("Question options must be a list.")
        question = cls(
            text=text.strip(),
            type=QuestionType.from_value(
                payload.get("questionType", payload.get("type"))
            ),
            options=tuple(Option.from_dict(item) for item in raw_options),
        )
        question.validate()
        return question


@dataclass(frozen=True)
class ExamSettings:
    timer_minutes: int = 10
    assistant_enabled: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.timer_minutes <= MAX_TIMER_MINUTES:
            raise QuizValidationError(
                f"Timer must be between 0 and {MAX_TIMER_MINUTES} minutes."
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timerMinutes": self.timer_minutes,
            "assistantEnabled": self.assistant_enabled,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ExamSettings":
        _require_mapping(payload, "Settings")
        return cls(
            timer_minutes=int(payload.get("timerMinutes", 0)),
            assistant_enabled=bool(payload.get("assistantEnabled", False)),
        )


@dataclass(frozen=True)
class QuestionSet:
    """Generated content before it becomes a library quiz."""

    title: str
    topic: str
    questions: tuple[Question, ...]


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    topic: str
    questions: tuple[Question, ...]
    settings: ExamSettings = field(default_factory=ExamSettings)
    created_at: float = 0.0

    def __post_init__(self) -> None:
        if not self.questions:
            raise QuizValidationError("A quiz needs at least one question.")

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "topic": self.topic,
            "questions": [question.to_dict() for question in self.questions],
            "settings": self.settings.to_dict(),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Quiz":
        _require_mapping(payload, "Quiz")
        try:
            raw_questions = payload["questions"]
            identifier = str(payload["id"])
        except KeyError as exc:
            raise QuizValidationError(
                f"Quiz payload missing required field: {exc}"
            ) from exc
        if not isinstance(raw_questions, list):
            raise QuizValidationError("Quiz questions must be a list.")
        return cls(
            id=identifier,
            title=str(payload.get("title", "")),
            topic=str(payload.get("topic", "")),
            questions=tuple(Question.from_dict(item) for item in raw_questions),
            settings=ExamSettings.from_dict(payload.get("settings") or {}),
            created_at=float(payload.get("createdAt", 0.0)),
        )


@dataclass(frozen=True)
class Result:
    answer_state: AnswerState
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "answers": {
                str(index): sorted(selected)
                for index, selected in sorted(self.answer_state.items())
            },
            "score": self.score,
        }


def freeze_answers(
    answers: Mapping[int, Iterable[int]],
) -> dict[int, frozenset[int]]:
    """Normalize a mapping of question index to selections into AnswerState."""

    return {
        int(index): frozenset(int(choice) for choice in selected)
        for index, selected in answers.items()
    }
