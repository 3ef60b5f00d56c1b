"""
Scene State (Data Model)
========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the selected shape, colour and the gesture
   connection status in one place.
2. Decoupling: Views read from this object; the control panel and the
   gesture worker write to it.

Classes:
    ParticleConfig: Count / colour / shape of a rendering session.
    RenderConfig: Pass-through settings for the render surface.
    SceneState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Optional

from zenparticles import config
from zenparticles.model.interaction import InteractionMailbox, InteractionState
from zenparticles.model.shapes import ParticleShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticleConfig:
    count: int = config.PARTICLE_COUNT
    color: str = config.DEFAULT_COLOR
    shape: ParticleShape = ParticleShape(config.DEFAULT_SHAPE)


@dataclass(frozen=True)
class RenderConfig:
    """Owned by the render surface; the core never reads it."""
    color: str = config.DEFAULT_COLOR
    point_size: float = config.POINT_SIZE
    opacity: float = config.POINT_OPACITY
    blend_mode: str = config.BLEND_MODE

    def with_color(self, color: str) -> RenderConfig:
        return replace(self, color=color)


@dataclass
class SceneState:
    """
    Holds the entire state of the open scene.
    Pass this instance to the controllers and views.
    """
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    mailbox: InteractionMailbox = field(default_factory=InteractionMailbox)

    is_connected: bool = False
    gesture_script: Optional[str] = None
    gesture_rate_hz: float = config.GESTURE_RATE_HZ

    def __post_init__(self) -> None:
        # Keep the render colour in sync with the session colour
        if self.render.color != self.particles.color:
            self.render = self.render.with_color(self.particles.color)

    @property
    def shape(self) -> ParticleShape:
        return self.particles.shape

    @property
    def interaction(self) -> InteractionState:
        return self.mailbox.latest()

    def set_shape(self, shape: ParticleShape) -> bool:
        """Returns True if the selection changed."""
        if shape == self.particles.shape:
            return False
        self.particles = replace(self.particles, shape=shape)
        logger.info(f"Shape selected: {shape}")
        return True

    def set_color(self, color: str) -> bool:
        if color == self.particles.color:
            return False
        self.particles = replace(self.particles, color=color)
        self.render = self.render.with_color(color)
        logger.info(f"Color selected: {color}")
        return True

    def reset(self) -> None:
        """Back to the default scene, keeping the particle count."""
        self.particles = ParticleConfig(count=self.particles.count)
        self.render = RenderConfig()
        self.mailbox.reset()
        self.is_connected = False
        logger.info("Scene state has been reset.")
