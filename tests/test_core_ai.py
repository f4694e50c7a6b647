from __future__ import annotations

import openai
import pytest

from fixtures import OpenAIStub, raising
from quizforge.core import ai
from quizforge.core.ai import AIClientError, chat_completion, load_client


def test_load_client_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ai, "load_dotenv", lambda: False)
    with pytest.raises(AIClientError) as exc:
        load_client()
    assert "OPENAI_API_KEY" in str(exc.value)


def test_load_client_passes_key(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_openai(**kwargs):
        captured.update(kwargs)
        return "client"

    monkeypatch.setattr(ai, "load_dotenv", lambda: False)
    monkeypatch.setattr(ai, "OpenAI", fake_openai)
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")

    assert load_client() == "client"
    assert captured == {"api_key": "test-key"}


def test_chat_completion_sends_prompts(openai_stub: OpenAIStub) -> None:
    openai_stub.queue_response("  answer  ")

    result = chat_completion(
        openai_stub,
        model="gpt-test",
        system_prompt="sys",
        user_prompt="user",
        temperature=0.2,
        max_tokens=50,
    )

    assert result == "answer"
    call = openai_stub.calls[0]
    assert call["model"] == "gpt-test"
    assert call["max_tokens"] == 50
    assert [m["role"] for m in call["messages"]] == ["system", "user"]


def test_chat_completion_returns_none_on_error() -> None:
    client = OpenAIStub(side_effect=raising(openai.OpenAIError("boom")))

    result = chat_completion(
        client,
        model="gpt-test",
        system_prompt="sys",
        user_prompt="user",
        temperature=0.2,
        max_tokens=50,
    )

    assert result is None


def test_chat_completion_empty_content(openai_stub: OpenAIStub) -> None:
    openai_stub.queue_response(None)

    assert (
        chat_completion(
            openai_stub,
            model="m",
            system_prompt="s",
            user_prompt="u",
            temperature=0.0,
            max_tokens=1,
        )
        == ""
    )


@pytest.mark.parametrize(
    "content, expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ("```\n[1]\n```", "[1]"),
        ('  {"a": 1}  ', '{"a": 1}'),
    ],
)
def test_strip_fences(content: str, expected: str) -> None:
    assert ai.strip_fences(content) == expected
