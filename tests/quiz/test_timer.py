from __future__ import annotations

import pytest

from quizforge.quiz.timer import Countdown, format_remaining


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_countdown_fires_once() -> None:
    clock = FakeClock()
    fired = []
    countdown = Countdown(60, lambda: fired.append(True), clock=clock)

    clock.now += 59.5
    assert countdown.tick() is False
    assert countdown.remaining() == 1

    clock.now += 0.5
    assert countdown.tick() is True
    assert countdown.tick() is False
    clock.now += 100
    assert countdown.tick() is False
    assert fired == [True]
    assert countdown.remaining() == 0
    assert countdown.active is False


def test_cancel_prevents_expiry() -> None:
    clock = FakeClock()
    fired = []
    countdown = Countdown(10, lambda: fired.append(True), clock=clock)

    countdown.cancel()
    clock.now += 20

    assert countdown.tick() is False
    assert fired == []


def test_countdown_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        Countdown(0, lambda: None)


@pytest.mark.parametrize(
    "seconds, expected",
    [(None, ""), (0, "0:00"), (59, "0:59"), (600, "10:00"), (-5, "0:00")],
)
def test_format_remaining(seconds, expected) -> None:
    assert format_remaining(seconds) == expected
