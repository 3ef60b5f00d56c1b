"""
Input/Output Manager
Exports rendered point-cloud frames to VTK-readable files.
"""
import logging
import math
import os

import numpy as np
import numpy.typing as npt
import pyvista as pv

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".vtp", ".vtk", ".ply")


class IOManager:
    @staticmethod
    def frame_to_polydata(
        positions: npt.NDArray[np.float64],
        color: str | None = None,
        rotation_y: float = 0.0
    ) -> pv.PolyData:
        """
        Point cloud of one frame. ``rotation_y`` (radians) is the same Y turn
        the render surface puts on the actor, so the file matches the screen.
        """
        points = np.array(positions, dtype=np.float64).reshape(-1, 3)
        cloud = pv.PolyData(points)
        cloud.point_data["index"] = np.arange(cloud.n_points)
        if rotation_y:
            cloud.rotate_y(math.degrees(rotation_y), inplace=True)
        if color is not None:
            cloud.field_data["color"] = [color]
        return cloud

    @staticmethod
    def export_frame(
        positions: npt.NDArray[np.float64],
        filepath: str,
        color: str | None = None,
        rotation_y: float = 0.0
    ) -> None:
        """Write one frame of particle positions as a point cloud (.vtp/.vtk/.ply)."""
        ext = os.path.splitext(filepath)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported export format '{ext}'. Use one of {', '.join(SUPPORTED_EXTENSIONS)}.")

        logger.info(f"Exporting frame to: {filepath}")
        try:
            cloud = IOManager.frame_to_polydata(positions, color if ext == ".vtp" else None, rotation_y)
            cloud.save(filepath)
        except Exception as e:
            logger.exception(f"Failed to export frame: {e}")
            raise e
        logger.info(f"Frame exported ({cloud.n_points} points).")
