"""Shared testing fixtures and stubs for the quizforge test suite."""

from .openai import OpenAIStub, raising  # noqa: F401
from .quizzes import generation_payload, make_quiz, multi, single  # noqa: F401
from .workspace import DataHome  # noqa: F401

__all__ = [
    "OpenAIStub",
    "DataHome",
    "generation_payload",
    "make_quiz",
    "multi",
    "raising",
    "single",
]
