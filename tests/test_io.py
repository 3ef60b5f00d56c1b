"""Tests covering point-cloud frame export."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import pyvista as pv

from zenparticles.model.io import IOManager


@pytest.mark.parametrize("suffix", [".vtp", ".vtk", ".ply"])
def test_export_frame_round_trips_points(tmp_path: Path, suffix: str) -> None:
    positions = np.random.default_rng(0).normal(size=(64, 3))
    target = tmp_path / f"frame{suffix}"

    IOManager.export_frame(positions, str(target), color="#4f46e5")

    cloud = pv.read(str(target))
    assert cloud.n_points == 64
    assert np.allclose(cloud.points, positions, atol=1e-5)


def test_export_frame_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        IOManager.export_frame(np.zeros((3, 3)), str(tmp_path / "frame.csv"))


def test_export_frame_applies_the_displayed_rotation(tmp_path: Path) -> None:
    positions = np.array([[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    target = tmp_path / "frame.vtp"

    IOManager.export_frame(positions, str(target), rotation_y=np.pi / 2)

    cloud = pv.read(str(target))
    # Same turn as actor.orientation = (0, 90, 0): +X goes to -Z, Y is untouched
    assert np.allclose(cloud.points, [[0.0, 0.0, -1.0], [0.0, 2.0, 0.0]], atol=1e-6)
    assert np.array_equal(positions, [[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]])


def test_frame_without_rotation_keeps_the_shape_frame() -> None:
    positions = np.array([[1.98, 0.0, 0.0]])

    cloud = IOManager.frame_to_polydata(positions)

    assert np.allclose(cloud.points, positions)
