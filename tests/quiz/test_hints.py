from __future__ import annotations

import openai

from fixtures import OpenAIStub, raising, single
from quizforge.quiz.hints import HINT_APOLOGY, build_hint_prompt, hint

QUESTION = single("Which keyword defines a function?", 1, ["fn", "def", "fun"])


def test_hint_returns_model_text(openai_stub: OpenAIStub) -> None:
    openai_stub.queue_response("Think about how Python spells 'define'.")

    text = hint(QUESTION, "no idea", client=openai_stub, model="h", max_tokens=42)

    assert text == "Think about how Python spells 'define'."
    call = openai_stub.calls[0]
    assert call["model"] == "h"
    assert call["max_tokens"] == 42
    assert "no idea" in openai_stub.last_user_prompt


def test_hint_prompt_lists_options_without_answers() -> None:
    prompt = build_hint_prompt(QUESTION, "help")

    assert "- fn\n- def\n- fun" in prompt
    assert "True" not in prompt
    assert "DO NOT state which option is correct" in prompt


def test_hint_apologizes_on_error() -> None:
    client = OpenAIStub(side_effect=raising(openai.OpenAIError("boom")))

    assert hint(QUESTION, "help", client=client) == HINT_APOLOGY


def test_hint_apologizes_on_empty_reply(openai_stub: OpenAIStub) -> None:
    openai_stub.queue_response("   ")

    assert hint(QUESTION, "help", client=openai_stub) == HINT_APOLOGY


def test_hint_without_client() -> None:
    assert hint(QUESTION, "help", client=None) == HINT_APOLOGY
