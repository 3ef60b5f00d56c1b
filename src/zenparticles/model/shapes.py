"""
Procedural Shape Generator
==========================
Samples the target point clouds the particles morph into.

Every sampler takes a particle count and a ``numpy.random.Generator`` and
returns an ``(N, 3)`` float array. The output is deterministic in shape and
structure only: each call draws fresh, independent samples from the shape's
distribution.
"""
from __future__ import annotations

import logging
import math
from enum import StrEnum
from typing import Callable, Dict, Optional, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class ParticleShape(StrEnum):
    SPHERE = "Sphere"
    HEART = "Heart"
    FLOWER = "Flower"
    SATURN = "Saturn"
    MEDITATOR = "Meditator"  # Approximate Buddha
    FIREWORKS = "Fireworks"

    @classmethod
    def parse(cls, value: Union[str, ParticleShape, None]) -> Optional[ParticleShape]:
        """Case-insensitive lookup by value or member name. None if unknown."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        return None


# ------------------------------------------------------------------------------
# Samplers
# ------------------------------------------------------------------------------
def sample_sphere(count: int, rng: np.random.Generator, radius: float = 2.0) -> npt.NDArray[np.float64]:
    """
    Uniform points on a sphere surface.

    The polar angle is drawn as acos(2u - 1); drawing it uniformly in [0, pi]
    would cluster points at the poles.
    """
    theta = rng.random(count) * TWO_PI
    phi = np.arccos(2.0 * rng.random(count) - 1.0)
    sin_phi = np.sin(phi)
    return np.column_stack((
        radius * sin_phi * np.cos(theta),
        radius * sin_phi * np.sin(theta),
        radius * np.cos(phi),
    ))


def sample_heart(count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    """Parametric heart curve, extruded along z for volume."""
    scale = 0.15
    t = rng.random(count) * TWO_PI
    x = 16.0 * np.sin(t) ** 3
    y = 13.0 * np.cos(t) - 5.0 * np.cos(2 * t) - 2.0 * np.cos(3 * t) - np.cos(4 * t)
    z = (rng.random(count) - 0.5) * 5.0
    return np.column_stack((x, y, z)) * scale


def sample_flower(count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    """Sphere-like surface with a 5-fold petal modulation of the radius."""
    u = rng.random(count) * TWO_PI
    v = rng.random(count) * math.pi
    r = 2.0 + np.sin(5 * u) * np.sin(5 * v)
    sin_v = np.sin(v)
    points = np.column_stack((
        r * sin_v * np.cos(u),
        r * sin_v * np.sin(u),
        r * np.cos(v),
    ))
    return points * 0.8


def sample_saturn(count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    """Flat ring (60 % of the points) around a small planet body."""
    is_ring = rng.random(count) > 0.4

    angle = rng.random(count) * TWO_PI
    dist = 3.0 + rng.random(count) * 1.5
    ring = np.column_stack((
        np.cos(angle) * dist,
        (rng.random(count) - 0.5) * 0.1,  # Flat ring
        np.sin(angle) * dist,
    ))

    body = sample_sphere(count, rng) * 0.7
    return np.where(is_ring[:, None], ring, body)


def sample_meditator(count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    """
    Seated figure from stacked primitives.

    A single uniform draw picks the region:
        r < 0.4        -> legs, a thin disk of radius 1.5 at y in [-1.5, -1.0)
        0.4 <= r < 0.7 -> torso, sphere scaled 0.6 centred at (0, -0.2, 0)
        r >= 0.7       -> head, sphere scaled 0.35 centred at (0, 0.9, 0)
    """
    region = rng.random(count)

    # Legs: sqrt of the radial draw gives uniform area density
    theta = rng.random(count) * TWO_PI
    radial = 1.5 * np.sqrt(rng.random(count))
    height = rng.random(count) * 0.5
    legs = np.column_stack((
        radial * np.cos(theta),
        height - 1.5,
        radial * np.sin(theta),
    ))

    torso = sample_sphere(count, rng) * 0.6 + np.array([0.0, -0.2, 0.0])
    head = sample_sphere(count, rng) * 0.35 + np.array([0.0, 0.9, 0.0])

    return np.where(
        (region < 0.4)[:, None],
        legs,
        np.where((region < 0.7)[:, None], torso, head),
    )


def sample_fireworks(count: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
    # The explosion is animated by the morph engine, not sampled here
    return sample_sphere(count, rng)


SHAPE_SAMPLERS: Dict[ParticleShape, Callable[[int, np.random.Generator], npt.NDArray[np.float64]]] = {
    ParticleShape.SPHERE: sample_sphere,
    ParticleShape.HEART: sample_heart,
    ParticleShape.FLOWER: sample_flower,
    ParticleShape.SATURN: sample_saturn,
    ParticleShape.MEDITATOR: sample_meditator,
    ParticleShape.FIREWORKS: sample_fireworks,
}


# ------------------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------------------
def generate_shape_positions(
    shape: Union[ParticleShape, str, None],
    count: int,
    rng: Optional[np.random.Generator] = None
) -> npt.NDArray[np.float64]:
    """
    Generate a fresh target buffer for ``shape``.

    Args:
        shape: Shape kind. Unknown kinds fall back to Sphere sampling.
        count: Number of positions to produce (positive).
        rng: Random source. A new unseeded generator is used when omitted.

    Returns:
        (count, 3) array of finite positions.
    """
    if rng is None:
        rng = np.random.default_rng()

    kind = ParticleShape.parse(shape)
    if kind is None:
        logger.warning(f"Unknown shape '{shape}', falling back to {ParticleShape.SPHERE}.")
        kind = ParticleShape.SPHERE

    positions = SHAPE_SAMPLERS[kind](int(count), rng)
    return np.ascontiguousarray(positions, dtype=np.float64)


def generate_starfield(
    count: int,
    radius: float,
    depth: float,
    rng: Optional[np.random.Generator] = None
) -> npt.NDArray[np.float64]:
    """Backdrop stars on a spherical shell between ``radius`` and ``radius + depth``."""
    if rng is None:
        rng = np.random.default_rng()
    directions = sample_sphere(count, rng, radius=1.0)
    distances = radius + depth * rng.random(count)
    return directions * distances[:, None]
