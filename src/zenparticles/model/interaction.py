"""
Interaction State
=================
The two gesture parameters that modulate the particle cloud, and the rules
for absorbing new samples from the gesture source.

Why is this file needed?
------------------------
1. Smoothing: gesture estimates arrive at 2-5 Hz and jitter between samples.
   Exponential smoothing keeps the cloud from snapping.
2. Hand-off: the gesture source runs on its own thread while the animation
   tick runs on the GUI thread. ``InteractionMailbox`` is the single slot
   between them (latest value wins, no backlog).

Classes:
    InteractionState: Immutable {tension, expansion} pair.
    InteractionMailbox: Lock-protected, smoothed, latest-value holder.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import threading
from typing import Any, Mapping

logger = logging.getLogger(__name__)

SMOOTHING_PREVIOUS_WEIGHT = 0.7
SMOOTHING_SAMPLE_WEIGHT = 0.3


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _number_or_zero(value: Any) -> float:
    try:
        numeric = float(value if value is not None else 0.0)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(numeric):
        return 0.0
    return numeric


@dataclass(frozen=True, slots=True)
class InteractionState:
    tension: float = 0.0  # 0 = open/relaxed hands, 1 = closed fists
    expansion: float = 0.0  # 0 = hands together, 1 = spread far apart

    def clamped(self) -> InteractionState:
        return InteractionState(clamp01(self.tension), clamp01(self.expansion))

    def to_dict(self) -> dict:
        return {"tension": float(self.tension), "expansion": float(self.expansion)}


IDLE_INTERACTION = InteractionState()


def coerce_sample(payload: Any) -> InteractionState:
    """
    Build an InteractionState from an untrusted ``{tension, expansion}`` payload.

    Missing, non-numeric or non-finite fields become 0. A payload that is not
    a mapping at all reads as idle. Range is not enforced.
    """
    if not payload or not isinstance(payload, Mapping):
        return IDLE_INTERACTION
    return InteractionState(
        tension=_number_or_zero(payload.get("tension")),
        expansion=_number_or_zero(payload.get("expansion")),
    )


def smooth_interaction(
    previous: InteractionState,
    sample: InteractionState,
    clamp: bool = True
) -> InteractionState:
    """
    Exponential smoothing applied once per arriving sample:
    ``next = 0.7 * previous + 0.3 * sample`` for each component.

    With ``clamp`` the result is limited to [0, 1] so downstream formulas
    (jitter sign, expansion scale) stay in range.
    """
    result = InteractionState(
        tension=SMOOTHING_PREVIOUS_WEIGHT * previous.tension + SMOOTHING_SAMPLE_WEIGHT * sample.tension,
        expansion=SMOOTHING_PREVIOUS_WEIGHT * previous.expansion + SMOOTHING_SAMPLE_WEIGHT * sample.expansion,
    )
    return result.clamped() if clamp else result


class InteractionMailbox:
    """
    Single-slot channel between the gesture source and the animation tick.

    ``post`` is called by the producer (any thread), ``latest`` by the tick.
    A sample posted while another is being applied simply replaces it.
    """

    def __init__(self, clamp: bool = True) -> None:
        self._lock = threading.Lock()
        self._state: InteractionState = IDLE_INTERACTION
        self._samples_received = 0
        self.clamp = clamp

    def post(self, sample: InteractionState) -> InteractionState:
        """Fold a raw sample into the smoothed value and return the new value."""
        with self._lock:
            self._state = smooth_interaction(self._state, sample, clamp=self.clamp)
            self._samples_received += 1
            return self._state

    def latest(self) -> InteractionState:
        with self._lock:
            return self._state

    @property
    def samples_received(self) -> int:
        with self._lock:
            return self._samples_received

    def reset(self) -> None:
        with self._lock:
            self._state = IDLE_INTERACTION
            self._samples_received = 0
        logger.debug("Interaction mailbox reset to idle.")
