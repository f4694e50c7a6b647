"""The quiz library: generated quizzes kept across sessions."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from quizforge.core.store import JsonStore

from .models import ExamSettings, QuestionSet, Quiz, QuizValidationError

__all__ = ["LIBRARY_KEY", "QuizLibrary"]

LIBRARY_KEY = "library"


class QuizLibrary:
    """In-memory quiz collection mirrored to a :class:`JsonStore`.

    The in-memory list is authoritative; a failed save is logged by the store
    and reported through ``last_save_ok`` without undoing the mutation.
    """

    def __init__(
        self,
        store: JsonStore,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._quizzes: list[Quiz] = []
        self.last_save_ok = True
        self._load()

    def __iter__(self) -> Iterator[Quiz]:
        return iter(list(self._quizzes))

    def __len__(self) -> int:
        return len(self._quizzes)

    def get(self, quiz_id: str) -> Optional[Quiz]:
        for quiz in self._quizzes:
            if quiz.id == quiz_id:
                return quiz
        return None

    def add(self, question_set: QuestionSet, settings: ExamSettings) -> Quiz:
        created_at = self._clock()
        quiz = Quiz(
            id=self._unique_id(created_at),
            title=question_set.title,
            topic=question_set.topic,
            questions=question_set.questions,
            settings=settings,
            created_at=created_at,
        )
        self._quizzes.append(quiz)
        self._logger.info(
            "Added quiz to library",
            extra={"quiz_id": quiz.id, "questions": quiz.question_count},
        )
        self._save()
        return quiz

    def delete(self, quiz_id: str) -> bool:
        remaining = [quiz for quiz in self._quizzes if quiz.id != quiz_id]
        if len(remaining) == len(self._quizzes):
            return False
        self._quizzes = remaining
        self._logger.info("Deleted quiz", extra={"quiz_id": quiz_id})
        self._save()
        return True

    def _unique_id(self, created_at: float) -> str:
        stamp = datetime.fromtimestamp(created_at, tz=timezone.utc)
        base = stamp.strftime("%Y%m%dT%H%M%S%fZ")
        candidate = base
        suffix = 1
        while self.get(candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate

    def _load(self) -> None:
        payload = self._store.load(LIBRARY_KEY)
        if payload is None:
            return
        if not isinstance(payload, list):
            self._logger.error(
                "Stored library is not a list; starting empty",
                extra={"type": type(payload).__name__},
            )
            return
        for position, item in enumerate(payload):
            try:
                self._quizzes.append(Quiz.from_dict(item))
            except (QuizValidationError, TypeError, ValueError) as exc:
                self._logger.warning(
                    "Skipped invalid stored quiz",
                    extra={"position": position, "error": str(exc)},
                )

    def _save(self) -> None:
        self.last_save_ok = self._store.save(
            LIBRARY_KEY, [quiz.to_dict() for quiz in self._quizzes]
        )
