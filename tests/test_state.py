"""Tests covering the shared scene state."""

from __future__ import annotations

from zenparticles import config
from zenparticles.model.interaction import InteractionState
from zenparticles.model.shapes import ParticleShape
from zenparticles.model.state import ParticleConfig, RenderConfig, SceneState


def test_defaults() -> None:
    scene = SceneState()

    assert scene.shape is ParticleShape.HEART
    assert scene.particles.count == config.PARTICLE_COUNT
    assert scene.render == RenderConfig(color=config.DEFAULT_COLOR, point_size=0.06, opacity=0.8, blend_mode="additive")
    assert scene.interaction == InteractionState(0.0, 0.0)
    assert scene.is_connected is False


def test_render_color_follows_session_color() -> None:
    scene = SceneState(particles=ParticleConfig(color="#ff0000"))
    assert scene.render.color == "#ff0000"

    assert scene.set_color("#00ff00") is True
    assert scene.render.color == "#00ff00"
    assert scene.set_color("#00ff00") is False


def test_set_shape_reports_changes() -> None:
    scene = SceneState()

    assert scene.set_shape(ParticleShape.SATURN) is True
    assert scene.shape is ParticleShape.SATURN
    assert scene.set_shape(ParticleShape.SATURN) is False


def test_interaction_reads_latest_mailbox_value() -> None:
    scene = SceneState()
    scene.mailbox.post(InteractionState(1.0, 0.0))

    assert scene.interaction.tension == 0.3


def test_reset_keeps_particle_count() -> None:
    scene = SceneState(particles=ParticleConfig(count=42, color="#123456", shape=ParticleShape.FLOWER))
    scene.mailbox.post(InteractionState(1.0, 1.0))
    scene.is_connected = True

    scene.reset()

    assert scene.particles == ParticleConfig(count=42)
    assert scene.render.color == config.DEFAULT_COLOR
    assert scene.interaction == InteractionState()
    assert scene.is_connected is False
