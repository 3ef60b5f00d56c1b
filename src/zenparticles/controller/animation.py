"""
Animation clock and idle camera policy for the render tick.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from zenparticles import config

MonotonicCallable = Callable[[], float]


@dataclass(frozen=True, slots=True)
class FrameTime:
    elapsed: float
    delta: float


class AnimationClock:
    """
    Elapsed/delta bookkeeping for a display-driven tick.

    ``delta`` is capped at ``max_delta`` so a stalled event loop (window drag,
    breakpoint) produces one bounded step instead of a jump.
    """

    def __init__(
        self,
        *,
        max_delta: float = config.MAX_DELTA_TIME,
        monotonic: Optional[MonotonicCallable] = None,
    ) -> None:
        self._monotonic: MonotonicCallable = monotonic if monotonic is not None else time.perf_counter
        self.max_delta = max(0.0, float(max_delta))
        self._start = self._monotonic()
        self._last = self._start
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def tick(self) -> FrameTime:
        now = self._monotonic()
        delta = min(max(0.0, now - self._last), self.max_delta)
        self._last = now
        self._elapsed += delta
        return FrameTime(elapsed=self._elapsed, delta=delta)

    def reset(self) -> None:
        self._start = self._monotonic()
        self._last = self._start
        self._elapsed = 0.0


def should_auto_rotate(is_connected: bool, tension: float) -> bool:
    """Idle orbit only while no gesture source drives the scene."""
    return not is_connected and tension < config.AUTO_ROTATE_TENSION_LIMIT


def auto_rotate_degrees(delta_time: float, speed: float = config.AUTO_ROTATE_SPEED) -> float:
    # speed 1.0 is one orbit per 60 s, so 0.5 is one per 120 s
    return 360.0 / 60.0 * speed * delta_time
