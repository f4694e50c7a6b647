from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the package is not installed.
ROOT = TESTS_DIR.parent
SRC = str(ROOT / "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from fixtures import DataHome, OpenAIStub, make_quiz  # noqa: E402
from quizforge.core.store import JsonStore  # noqa: E402
from quizforge.quiz.models import Quiz  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Point the workspace at tmp and keep real credentials out of tests."""

    monkeypatch.setenv("QUIZFORGE_DATA_HOME", str(tmp_path / "qf-home"))
    for name in (
        "QUIZFORGE_CONFIG",
        "QUIZFORGE_AI_MODEL",
        "QUIZFORGE_EXPORT_DIR",
        "QUIZFORGE_LOG_LEVEL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_quizforge_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("quizforge")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def openai_stub() -> OpenAIStub:
    return OpenAIStub()


@pytest.fixture
def workspace(tmp_path: Path) -> DataHome:
    return DataHome(tmp_path / "qf-home")


@pytest.fixture
def quiz() -> Quiz:
    return make_quiz()


@pytest.fixture
def store(tmp_path: Path) -> JsonStore:
    return JsonStore(tmp_path / "store")
