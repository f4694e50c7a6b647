"""Exam countdown driven by a monotonic clock.

The session polls ``tick()`` between user actions. Expiry invokes the
callback once; after expiry or ``cancel()`` further ticks do nothing.
"""

from __future__ import annotations

import math
import time
from typing import Callable, Optional

__all__ = ["Countdown", "format_remaining"]


class Countdown:
    def __init__(
        self,
        seconds: int,
        on_expire: Callable[[], None],
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if seconds <= 0:
            raise ValueError("countdown needs a positive duration")
        self._duration = seconds
        self._on_expire = on_expire
        self._clock = clock
        self._deadline = clock() + seconds
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def remaining(self) -> int:
        """Whole seconds left, rounded up; zero once expired or cancelled."""

        if not self._active:
            return 0
        return max(0, math.ceil(self._deadline - self._clock()))

    def tick(self) -> bool:
        """Fire the expiry callback if time is up. Returns True when it fired."""

        if not self._active:
            return False
        if self._clock() < self._deadline:
            return False
        self._active = False
        self._on_expire()
        return True

    def cancel(self) -> None:
        self._active = False


def format_remaining(seconds: Optional[int]) -> str:
    if seconds is None:
        return ""
    minutes, rest = divmod(max(0, seconds), 60)
    return f"{minutes}:{rest:02d}"
