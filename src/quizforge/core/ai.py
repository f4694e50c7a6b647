"""OpenAI client bootstrap and the chat-completion call shared by AI features."""

from __future__ import annotations

import logging
import os
import re
from typing import Any

from dotenv import load_dotenv
from openai import OpenAI, OpenAIError

__all__ = ["AIClientError", "chat_completion", "load_client", "strip_fences"]

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.+?)```", re.DOTALL)


class AIClientError(RuntimeError):
    """Raised when an AI client cannot be created."""


def load_client() -> Any:
    """Initialize an OpenAI client using environment-derived credentials."""

    load_dotenv()
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise AIClientError(
            "OPENAI_API_KEY not found in environment. Set it or add to .env"
        )
    return OpenAI(api_key=api_key)


def chat_completion(
    client: Any,
    *,
    model: str,
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    max_tokens: int,
) -> str | None:
    """Return the stripped message content, or ``None`` when the call fails."""

    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content
    except (OpenAIError, AttributeError, IndexError, KeyError) as exc:
        logger.warning(
            "Chat completion failed",
            extra={"model": model, "error": str(exc)},
        )
        return None
    return (content or "").strip()


def strip_fences(content: str) -> str:
    """Return the body of a fenced code block, or ``content`` unchanged."""

    fenced = _FENCE_RE.search(content)
    return fenced.group(1).strip() if fenced else content.strip()
