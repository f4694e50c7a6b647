"""Hint assistant: nudges the learner without revealing the answer."""

from __future__ import annotations

import logging
from typing import Any

from quizforge.core.ai import chat_completion

from .models import Question

__all__ = ["HINT_APOLOGY", "GREETING", "build_hint_prompt", "hint"]

HINT_APOLOGY = (
    "I'm sorry, I'm having trouble coming up with a hint right now. "
    "Please try asking in a different way."
)
GREETING = (
    "Hi! I'm your AI assistant. Ask me about this question. Remember, I can "
    "only give hints, not answers!"
)

logger = logging.getLogger(__name__)


def build_hint_prompt(question: Question, user_text: str) -> str:
    options = "\n".join(f"- {option.text}" for option in question.options)
    return (
        "A user is stuck on the following question:\n"
        "---\n"
        f"Question: {question.text}\n"
        f"Options:\n{options}\n"
        "---\n"
        f'The user\'s query is: "{user_text}"\n\n'
        "Give a helpful hint that guides the user toward the correct answer "
        "without revealing it. Explain a concept, ask a leading question, or "
        "clarify a term from the question. Keep it to 2-3 sentences.\n"
        "DO NOT state which option is correct or incorrect."
    )


def hint(
    question: Question,
    user_text: str,
    *,
    client: Any,
    model: str = "gpt-4o-mini",
    max_tokens: int = 300,
) -> str:
    """Return a hint for ``question``; never raises."""

    if client is None:
        return HINT_APOLOGY
    content = chat_completion(
        client,
        model=model,
        system_prompt=(
            "You are an assistant for a quiz application. You give hints, "
            "never answers."
        ),
        user_prompt=build_hint_prompt(question, user_text),
        temperature=0.7,
        max_tokens=max_tokens,
    )
    if not content:
        logger.warning("Hint request produced no content", extra={"model": model})
        return HINT_APOLOGY
    return content
