"""AI-backed quiz generation.

``generate`` asks the chat model for a JSON quiz, normalizes the payload and
drops questions that break the correct-option invariants. It returns ``None``
on any failure so callers can show one generic retry message; nothing partial
ever reaches the library.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Collection, List, Optional

from quizforge.core.ai import chat_completion, strip_fences

from .models import (
    Question,
    QuestionSet,
    QuestionType,
    QuizValidationError,
)

__all__ = [
    "GENERATION_RETRY_MESSAGE",
    "MAX_QUESTIONS",
    "MIN_QUESTIONS",
    "build_generation_prompts",
    "generate",
    "parse_question_set",
]

MIN_QUESTIONS = 1
MAX_QUESTIONS = 25

GENERATION_RETRY_MESSAGE = (
    "Failed to generate the quiz. The AI might be busy or the request could "
    "not be processed. Please try again."
)

logger = logging.getLogger(__name__)


def build_generation_prompts(
    topic: str, count: int, types: Collection[QuestionType]
) -> tuple[str, str]:
    type_names = ", ".join(
        qtype.value for qtype in sorted(types, key=lambda item: item.value)
    )
    system_prompt = "You write accurate, well-explained multiple-choice quizzes."
    schema = (
        '{"title": str, "topic": str, "questions": [{"questionText": str, '
        '"questionType": "SINGLE_SELECT" | "MULTI_SELECT", "options": '
        '[{"optionText": str, "isCorrect": bool, "explanation": str}]}]}'
    )
    user_prompt = (
        f'Create a quiz about "{topic}".\n'
        f"The quiz must have exactly {count} questions.\n"
        f"Use a mix of these question types: {type_names}.\n"
        "Give every question 4-5 options. For each option say whether it is "
        "correct and briefly explain why it is correct or incorrect.\n"
        "Every question needs at least one correct option; SINGLE_SELECT "
        "questions need exactly one.\n"
        "Question and option text may use Markdown (code blocks, bold).\n"
        f"Respond with a single JSON object matching this schema:\n{schema}"
    )
    return system_prompt, user_prompt


def generate(
    topic: str,
    count: int,
    types: Collection[QuestionType],
    *,
    client: Any,
    model: str = "gpt-4o-mini",
    temperature: float = 0.4,
    max_tokens: int = 6000,
) -> Optional[QuestionSet]:
    """Generate a question set about ``topic`` or return ``None``."""

    topic = topic.strip()
    if not topic or not types or not MIN_QUESTIONS <= count <= MAX_QUESTIONS:
        logger.warning(
            "Rejected generation request",
            extra={"topic": topic, "count": count, "types": sorted(types)},
        )
        return None

    system_prompt, user_prompt = build_generation_prompts(topic, count, types)
    content = chat_completion(
        client,
        model=model,
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not content:
        logger.error("Generation returned no content", extra={"topic": topic})
        return None

    question_set = parse_question_set(
        content, topic=topic, count=count, types=types
    )
    if question_set is None:
        return None
    logger.info(
        "Generated question set",
        extra={"topic": topic, "questions": len(question_set.questions)},
    )
    return question_set


def parse_question_set(
    content: str,
    *,
    topic: str,
    count: int,
    types: Collection[QuestionType],
) -> Optional[QuestionSet]:
    """Turn raw model output into a validated ``QuestionSet``."""

    try:
        data = json.loads(strip_fences(content))
    except json.JSONDecodeError as exc:
        logger.error(
            "Generation payload is not valid JSON",
            extra={"topic": topic, "error": str(exc)},
        )
        return None
    if isinstance(data, list):
        data = {"questions": data}
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        logger.error("Generation payload has no questions", extra={"topic": topic})
        return None

    allowed = set(types)
    questions: List[Question] = []
    for position, raw in enumerate(data["questions"]):
        if len(questions) >= count:
            break
        if not isinstance(raw, dict):
            continue
        try:
            question = Question.from_dict(raw)
        except QuizValidationError as exc:
            logger.warning(
                "Dropped invalid generated question",
                extra={"topic": topic, "position": position, "error": str(exc)},
            )
            continue
        if question.type not in allowed:
            logger.warning(
                "Dropped question of unrequested type",
                extra={"position": position, "type": question.type.value},
            )
            continue
        questions.append(question)

    if not questions:
        logger.error("Generated quiz has no usable questions", extra={"topic": topic})
        return None

    title = str(data.get("title") or "").strip() or f"{topic} Quiz"
    return QuestionSet(
        title=title,
        topic=str(data.get("topic") or "").strip() or topic,
        questions=tuple(questions),
    )
