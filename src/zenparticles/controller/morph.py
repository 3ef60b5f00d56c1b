"""
Morph Engine
============
Per-frame integrator that eases the live particle buffer toward the current
target buffer.

Each tick, for particle ``i`` with target ``T_i``:
    1. Expansion: scale ``T_i`` (breathing scale, or a detonation pulse for
       Fireworks).
    2. Jitter: if tension > 0.05, add a uniform offset in
       [-tension * 0.05, tension * 0.05] per axis.
    3. Morph: ``live += (scaled - live) * morph_speed`` with
       ``morph_speed = 3 * dt`` (time constant ~1/3 s).
    4. Idle float: small phase-offset sine added to the rendered x/y only.
    5. Rotation: the cloud's frame turns about the vertical axis by
       ``dt * 0.1 * (1 + tension * 5)`` radians.

Particles are paired with targets by index only. A shape switch re-aims the
live buffer; it never resets it.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Union, TYPE_CHECKING

import numpy as np

from zenparticles.model.interaction import InteractionState, IDLE_INTERACTION
from zenparticles.model.shapes import ParticleShape

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MORPH_RATE = 3.0
EXPANSION_GAIN = 2.0
FIREWORKS_EXPANSION_GAIN = 3.0
JITTER_THRESHOLD = 0.05
JITTER_GAIN = 0.1
FLOAT_AMPLITUDE = 0.02
FLOAT_PHASE_STEP = 0.1
ROTATION_RATE = 0.1
ROTATION_TENSION_GAIN = 5.0


def fireworks_envelope(elapsed_time: float) -> float:
    """Pulsing detonation scale in [0, 4]."""
    return (math.sin(elapsed_time * 0.5) + 1.0) * 2.0


def expansion_scale(shape: Union[ParticleShape, str, None], expansion: float, elapsed_time: float) -> float:
    if ParticleShape.parse(shape) is ParticleShape.FIREWORKS:
        return fireworks_envelope(elapsed_time) + expansion * FIREWORKS_EXPANSION_GAIN
    return 1.0 + expansion * EXPANSION_GAIN  # 1x .. 3x


def morph_speed(delta_time: float) -> float:
    # Capped at 1 so an oversized step lands on the target instead of overshooting
    return min(MORPH_RATE * max(0.0, float(delta_time)), 1.0)


def rotation_step(delta_time: float, tension: float) -> float:
    """Radians the cloud turns about the vertical axis during this tick."""
    return delta_time * ROTATION_RATE * (1.0 + max(0.0, tension) * ROTATION_TENSION_GAIN)


def idle_float(count: int, elapsed_time: float) -> npt.NDArray[np.float64]:
    """(count, 2) x/y offsets; the per-index phase keeps particles out of unison."""
    phase = np.arange(count, dtype=np.float64) * FLOAT_PHASE_STEP
    return np.column_stack((
        np.sin(elapsed_time * 0.5 + phase) * FLOAT_AMPLITUDE,
        np.cos(elapsed_time * 0.3 + phase) * FLOAT_AMPLITUDE,
    ))


def advance(
    live: npt.NDArray[np.float64],
    target: npt.NDArray[np.float64],
    interaction: InteractionState,
    shape: Union[ParticleShape, str, None],
    elapsed_time: float,
    delta_time: float,
    rng: Optional[np.random.Generator] = None
) -> float:
    """
    Advance ``live`` one tick toward ``target`` in place.

    Both buffers must be (N, 3); this is checked when the buffers are handed
    to a ``MorphEngine``, not here.

    Returns:
        The rotation increment (radians) for this tick.
    """
    tension = max(0.0, float(interaction.tension))
    scaled = target * expansion_scale(shape, float(interaction.expansion), elapsed_time)

    if tension > JITTER_THRESHOLD:
        if rng is None:
            rng = np.random.default_rng()
        scaled += (rng.random(scaled.shape) - 0.5) * (tension * JITTER_GAIN)

    live += (scaled - live) * morph_speed(delta_time)
    return rotation_step(delta_time, tension)


class MorphEngine:
    """
    Owns the live position buffer and the rendered (floating) copy of it.

    The render surface reads ``rendered`` and ``rotation_y`` after each tick and
    clears ``needs_upload`` once the data has been pushed to the GPU.
    """

    def __init__(
        self,
        count: int,
        rng: Optional[np.random.Generator] = None,
        initial: Optional[npt.NDArray[np.float64]] = None
    ) -> None:
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count <= 0:
            raise ValueError(f"Particle count must be a positive integer, got {count!r}.")

        self.count: int = int(count)
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

        self.live: npt.NDArray[np.float64] = np.zeros((self.count, 3), dtype=np.float64)
        if initial is not None:
            self.live[:] = self._validated(initial, "initial")
        self.rendered: npt.NDArray[np.float64] = self.live.copy()

        self.target: npt.NDArray[np.float64] = np.zeros((self.count, 3), dtype=np.float64)
        self.shape: ParticleShape = ParticleShape.SPHERE

        self.rotation_y: float = 0.0
        self.needs_upload: bool = True

    def _validated(self, buffer: npt.NDArray[np.float64], name: str) -> npt.NDArray[np.float64]:
        arr = np.asarray(buffer, dtype=np.float64)
        if arr.shape != (self.count, 3):
            raise ValueError(f"Expected {name} buffer of shape ({self.count}, 3), got {arr.shape}.")
        return arr

    def set_target(self, target: npt.NDArray[np.float64], shape: Union[ParticleShape, str]) -> None:
        """
        Replace the target buffer wholesale. The live buffer is left untouched
        and simply eases toward the new target from wherever it is.
        """
        arr = self._validated(target, "target")
        self.target = arr.copy()
        self.target.setflags(write=False)
        self.shape = ParticleShape.parse(shape) or ParticleShape.SPHERE
        logger.debug(f"Morph target replaced ({self.shape}, {self.count} particles).")

    def advance(
        self,
        interaction: InteractionState = IDLE_INTERACTION,
        elapsed_time: float = 0.0,
        delta_time: float = 0.0
    ) -> npt.NDArray[np.float64]:
        """Run one tick; returns the rendered buffer (valid until the next tick)."""
        self.rotation_y += advance(
            self.live, self.target, interaction, self.shape, elapsed_time, delta_time, self.rng
        )
        self.rendered[:] = self.live
        self.rendered[:, :2] += idle_float(self.count, elapsed_time)
        self.needs_upload = True
        return self.rendered

    def mark_uploaded(self) -> None:
        self.needs_upload = False
