"""Tests covering the per-tick morph integrator."""

from __future__ import annotations

import math

import numpy as np
import pytest

from zenparticles.controller.morph import (
    MorphEngine,
    advance,
    expansion_scale,
    idle_float,
    morph_speed,
    rotation_step,
)
from zenparticles.model.interaction import InteractionState
from zenparticles.model.shapes import ParticleShape, generate_shape_positions

DT = 1.0 / 60.0


def test_engine_rejects_invalid_counts() -> None:
    for count in (0, -5, 2.5, True):
        with pytest.raises(ValueError):
            MorphEngine(count)  # type: ignore[arg-type]


def test_engine_rejects_mismatched_buffers() -> None:
    engine = MorphEngine(10)
    with pytest.raises(ValueError):
        engine.set_target(np.zeros((9, 3)), ParticleShape.SPHERE)
    with pytest.raises(ValueError):
        engine.set_target(np.zeros((10, 2)), ParticleShape.SPHERE)
    with pytest.raises(ValueError):
        MorphEngine(10, initial=np.zeros((11, 3)))


def test_expansion_scale_per_shape() -> None:
    assert expansion_scale(ParticleShape.HEART, 0.0, 0.0) == pytest.approx(1.0)
    assert expansion_scale(ParticleShape.HEART, 1.0, 0.0) == pytest.approx(3.0)
    # Fireworks pulse: (sin(t * 0.5) + 1) * 2 + expansion * 3
    assert expansion_scale(ParticleShape.FIREWORKS, 0.0, 0.0) == pytest.approx(2.0)
    assert expansion_scale(ParticleShape.FIREWORKS, 0.0, math.pi) == pytest.approx(4.0)
    assert expansion_scale(ParticleShape.FIREWORKS, 1.0, 3 * math.pi) == pytest.approx(3.0)


def test_morph_speed_never_overshoots() -> None:
    assert morph_speed(DT) == pytest.approx(0.05)
    assert morph_speed(0.5) == 1.0
    assert morph_speed(-1.0) == 0.0


def test_rotation_speeds_up_with_tension() -> None:
    assert rotation_step(DT, 0.0) == pytest.approx(DT * 0.1)
    assert rotation_step(DT, 1.0) == pytest.approx(DT * 0.6)
    assert rotation_step(DT, -3.0) == pytest.approx(DT * 0.1)


def test_converges_to_target_without_overshoot() -> None:
    target = np.array([[2.0, -1.0, 0.5]])
    live = np.array([[0.0, 0.0, 0.0]])
    idle = InteractionState()

    ticks = int(round(1.5 / DT))
    for _ in range(ticks):
        advance(live, target, idle, ParticleShape.SPHERE, 0.0, DT)
        # Monotone approach: every axis stays between start and target
        assert live[0, 0] <= 2.0 + 1e-12
        assert live[0, 1] >= -1.0 - 1e-12
        assert live[0, 2] <= 0.5 + 1e-12

    error = np.linalg.norm(live - target) / np.linalg.norm(target)
    assert error < 0.01


def test_no_jitter_below_threshold() -> None:
    target = generate_shape_positions(ParticleShape.HEART, 200, np.random.default_rng(0))
    start = np.random.default_rng(1).normal(size=(200, 3))
    interaction = InteractionState(tension=0.04, expansion=0.0)

    results = []
    for seed in range(5):
        live = start.copy()
        advance(live, target, interaction, ParticleShape.HEART, 1.25, DT, np.random.default_rng(seed))
        results.append(live)

    for other in results[1:]:
        assert np.array_equal(results[0], other)


def test_jitter_stays_within_tension_band() -> None:
    rng = np.random.default_rng(42)
    engine = MorphEngine(1, rng=rng)
    # End-to-end: the fixed-draw sphere point (2, 0, 0)
    engine.set_target(np.array([[2.0, 0.0, 0.0]]), ParticleShape.SPHERE)
    interaction = InteractionState(tension=1.0, expansion=0.0)

    offsets = []
    for _ in range(200):
        # A full morph step lands exactly on the jittered target
        advance(engine.live, engine.target, interaction, engine.shape, 0.0, 0.5, rng)
        offsets.append(engine.live[0] - [2.0, 0.0, 0.0])

    offsets = np.array(offsets)
    assert np.all(np.abs(offsets) <= 0.05 + 1e-12)
    assert np.std(offsets) > 0.0


def test_negative_tension_is_treated_as_rest() -> None:
    target = np.ones((50, 3))
    live_a = np.zeros((50, 3))
    live_b = np.zeros((50, 3))

    advance(live_a, target, InteractionState(tension=-2.0), ParticleShape.SPHERE, 0.0, DT)
    advance(live_b, target, InteractionState(tension=0.0), ParticleShape.SPHERE, 0.0, DT)

    assert np.array_equal(live_a, live_b)


def test_shape_switch_re_aims_without_reset() -> None:
    rng = np.random.default_rng(3)
    engine = MorphEngine(300, rng=rng)
    engine.set_target(generate_shape_positions(ParticleShape.SPHERE, 300, rng), ParticleShape.SPHERE)
    for i in range(30):
        engine.advance(InteractionState(), i * DT, DT)

    before = engine.live.copy()
    new_target = generate_shape_positions(ParticleShape.SATURN, 300, rng)
    engine.set_target(new_target, ParticleShape.SATURN)

    # Switching alone does not move anything
    assert np.array_equal(engine.live, before)

    engine.advance(InteractionState(), 31 * DT, DT)
    step = np.abs(engine.live - before)
    max_step = morph_speed(DT) * np.abs(new_target - before)
    assert np.all(step <= max_step + 1e-12)


def test_set_target_copies_and_freezes() -> None:
    engine = MorphEngine(4)
    target = np.ones((4, 3))
    engine.set_target(target, "Heart")
    target[:] = 5.0

    assert np.all(engine.target == 1.0)
    assert engine.shape is ParticleShape.HEART
    with pytest.raises(ValueError):
        engine.target[0, 0] = 2.0


def test_rendered_adds_idle_float_to_xy_only() -> None:
    engine = MorphEngine(3, initial=np.full((3, 3), 1.0))
    engine.set_target(np.full((3, 3), 1.0), ParticleShape.SPHERE)

    rendered = engine.advance(InteractionState(), 0.0, 0.0)

    # Live buffer is not touched by the float
    assert np.allclose(engine.live, 1.0)
    expected = idle_float(3, 0.0)
    assert np.allclose(rendered[:, 0], 1.0 + expected[:, 0])
    assert np.allclose(rendered[:, 1], 1.0 + expected[:, 1])
    assert np.allclose(rendered[:, 2], 1.0)
    # i = 0: sin(0) = 0, cos(0) * 0.02
    assert rendered[0, 0] == pytest.approx(1.0)
    assert rendered[0, 1] == pytest.approx(1.02)


def test_idle_float_is_phase_offset_per_particle() -> None:
    offsets = idle_float(5, 2.0)
    assert offsets.shape == (5, 2)
    assert len(np.unique(np.round(offsets[:, 0], 12))) == 5
    assert np.all(np.abs(offsets) <= 0.02)


def test_engine_accumulates_rotation_and_upload_flag() -> None:
    engine = MorphEngine(8)
    engine.set_target(np.zeros((8, 3)), ParticleShape.SPHERE)
    engine.mark_uploaded()
    assert engine.needs_upload is False

    engine.advance(InteractionState(tension=1.0), 0.0, 1.0)
    assert engine.needs_upload is True
    assert engine.rotation_y == pytest.approx(0.6)


def test_fireworks_expansion_pulses_over_time() -> None:
    target = np.array([[1.0, 0.0, 0.0]])
    early = np.zeros((1, 3))
    late = np.zeros((1, 3))

    advance(early, target, InteractionState(), ParticleShape.FIREWORKS, 0.0, 1.0)
    advance(late, target, InteractionState(), ParticleShape.FIREWORKS, math.pi, 1.0)

    assert early[0, 0] == pytest.approx(2.0)
    assert late[0, 0] == pytest.approx(4.0)
