"""Tests covering the animation clock and idle camera policy."""

from __future__ import annotations

import pytest

from zenparticles.controller.animation import AnimationClock, auto_rotate_degrees, should_auto_rotate


class FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def now(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


def test_tick_reports_delta_and_elapsed() -> None:
    clock = FakeClock()
    animation = AnimationClock(monotonic=clock.now)

    clock.advance(0.016)
    first = animation.tick()
    clock.advance(0.020)
    second = animation.tick()

    assert first.delta == pytest.approx(0.016)
    assert second.delta == pytest.approx(0.020)
    assert second.elapsed == pytest.approx(0.036)
    assert animation.elapsed == pytest.approx(0.036)


def test_delta_is_capped_after_a_stall() -> None:
    clock = FakeClock()
    animation = AnimationClock(max_delta=0.1, monotonic=clock.now)

    clock.advance(5.0)
    frame = animation.tick()

    assert frame.delta == pytest.approx(0.1)
    assert frame.elapsed == pytest.approx(0.1)


def test_clock_going_backwards_gives_zero_delta() -> None:
    clock = FakeClock()
    clock.value = 10.0
    animation = AnimationClock(monotonic=clock.now)

    clock.value = 9.0
    assert animation.tick().delta == 0.0


def test_reset_restarts_elapsed() -> None:
    clock = FakeClock()
    animation = AnimationClock(monotonic=clock.now)
    clock.advance(0.05)
    animation.tick()

    animation.reset()
    assert animation.elapsed == 0.0
    clock.advance(0.01)
    assert animation.tick().elapsed == pytest.approx(0.01)


@pytest.mark.parametrize(
    "connected, tension, expected",
    [
        (False, 0.0, True),
        (False, 0.09, True),
        (False, 0.1, False),
        (True, 0.0, False),
    ],
)
def test_should_auto_rotate(connected: bool, tension: float, expected: bool) -> None:
    assert should_auto_rotate(connected, tension) is expected


def test_auto_rotate_full_orbit_every_two_minutes() -> None:
    assert auto_rotate_degrees(120.0, speed=0.5) == pytest.approx(360.0)
    assert auto_rotate_degrees(0.0) == 0.0
