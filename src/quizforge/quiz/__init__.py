"""Quiz domain: models, evaluation, generation, hints, library and sessions."""

from .evaluator import (
    OptionMark,
    OptionStatus,
    classify_option,
    evaluate,
    format_score,
    grade,
    question_outcomes,
    score,
)
from .generator import GENERATION_RETRY_MESSAGE, generate, parse_question_set
from .hints import HINT_APOLOGY, hint
from .library import QuizLibrary
from .models import (
    AnswerState,
    ExamSettings,
    Option,
    Question,
    QuestionSet,
    QuestionType,
    Quiz,
    QuizValidationError,
    Result,
    freeze_answers,
)
from .session import ExamOutcome, ExamSession, run_exam_session
from .timer import Countdown, format_remaining

__all__ = [
    "AnswerState",
    "Countdown",
    "ExamOutcome",
    "ExamSession",
    "ExamSettings",
    "GENERATION_RETRY_MESSAGE",
    "HINT_APOLOGY",
    "Option",
    "OptionMark",
    "OptionStatus",
    "Question",
    "QuestionSet",
    "QuestionType",
    "Quiz",
    "QuizLibrary",
    "QuizValidationError",
    "Result",
    "classify_option",
    "evaluate",
    "format_remaining",
    "format_score",
    "freeze_answers",
    "generate",
    "grade",
    "hint",
    "parse_question_set",
    "question_outcomes",
    "run_exam_session",
    "score",
]
