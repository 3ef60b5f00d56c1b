"""
3D Visualization Widget (PyVista Wrapper) - Particle Cloud Render Surface
"""

from __future__ import annotations

import math
from typing import Optional

import logging
import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QStyle
)
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor
import pyvista as pv

from zenparticles import config
from zenparticles.model.state import RenderConfig

logger = logging.getLogger(__name__)

# Points are drawn in screen pixels; world-sized points are approximated
POINT_PIXELS_PER_UNIT = 50.0
STAR_POINT_SIZE = 1.5
STAR_OPACITY = 0.6


class ParticleViewWidget(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._cloud: Optional[pv.PolyData] = None
        self._cloud_actor: Optional[pv.Actor] = None
        self._stars_actor: Optional[pv.Actor] = None
        self._render_config: RenderConfig = RenderConfig()

        # --- Visibility state ---
        self._visible_stars: bool = True

        self._setup_overlay_controls()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def init_scene(
        self,
        positions: npt.NDArray[np.float64],
        render_config: RenderConfig,
        stars: Optional[npt.NDArray[np.float64]] = None
    ) -> None:
        """
        Creates the actors once per session:
        1. Starfield backdrop (optional)
        2. Particle cloud bound to the engine's rendered buffer
        """
        logger.info(f"Initializing particle scene ({len(positions)} particles).")
        self._render_config = render_config

        if stars is not None:
            self._stars_actor = self.plotter.add_points(
                pv.PolyData(np.asarray(stars, dtype=np.float64)),
                color=config.STAR_COLOR,
                point_size=STAR_POINT_SIZE,
                opacity=STAR_OPACITY,
                pickable=False,
                reset_camera=False,
            )

        self._cloud = pv.PolyData(np.array(positions, dtype=np.float64))
        self._cloud_actor = self.plotter.add_points(
            self._cloud,
            color=render_config.color,
            point_size=render_config.point_size * POINT_PIXELS_PER_UNIT,
            opacity=render_config.opacity,
            render_points_as_spheres=True,
            lighting=False,
            pickable=False,
            reset_camera=False,
        )

        self._apply_visibility()
        self.reset_camera()

    def update_frame(self, positions: npt.NDArray[np.float64], rotation_y: float) -> None:
        """
        Uploads one tick of particle positions. The buffer is only read here;
        the caller keeps ownership.
        """
        if self._cloud is None or self._cloud_actor is None:
            return
        self._cloud.points = np.array(positions, dtype=np.float64)
        self._cloud_actor.orientation = (0.0, math.degrees(rotation_y), 0.0)
        self.plotter.render()

    def set_render_config(self, render_config: RenderConfig) -> None:
        self._render_config = render_config
        if self._cloud_actor is None:
            return
        prop = self._cloud_actor.prop
        prop.color = render_config.color
        prop.opacity = render_config.opacity
        prop.point_size = render_config.point_size * POINT_PIXELS_PER_UNIT
        self.plotter.render()

    def orbit_camera(self, degrees: float) -> None:
        """Rotates the camera around the focal point (idle auto-rotate)."""
        if degrees == 0.0:
            return
        self.plotter.camera.Azimuth(degrees)
        self.plotter.renderer.ResetCameraClippingRange()

    def reset_camera(self) -> None:
        camera = self.plotter.camera
        camera.position = config.CAMERA_POSITION
        camera.focal_point = (0.0, 0.0, 0.0)
        camera.up = (0.0, 1.0, 0.0)
        camera.view_angle = config.CAMERA_FOV
        self.plotter.renderer.ResetCameraClippingRange()
        self.plotter.render()

    def set_stars_visible(self, visible: bool, render: bool = True) -> None:
        """
        Public slot to toggle the starfield.
        Args:
            visible: True to show, False to hide.
            render: If True, triggers a re-render immediately. Set False for batch updates.
        """
        self._visible_stars = visible
        # Sync UI button without triggering signal loop
        if self.btn_vis_stars.isChecked() != visible:
            self.btn_vis_stars.blockSignals(True)
            self.btn_vis_stars.setChecked(visible)
            self.btn_vis_stars.blockSignals(False)

        self._apply_visibility()
        if render:
            self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(config.BACKGROUND_COLOR)
        # Orbit and zoom only: the cloud stays centred on the origin
        self.plotter.enable_custom_trackball_style(
            left="rotate", shift_left="rotate", control_left="spin",
            middle="dolly", shift_middle="dolly", control_middle="dolly",
            right="dolly", shift_right="dolly", control_right="dolly",
        )

    def _apply_visibility(self) -> None:
        if self._stars_actor:
            self._stars_actor.SetVisibility(self._visible_stars)

    def _setup_overlay_controls(self) -> None:
        """Floating toggle buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(0, 0, 0, 120); border-radius: 6px; border: 1px solid #333; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(99, 102, 241, 80); border: 1px solid #6366f1; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(255, 255, 255, 20); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        self.btn_vis_stars = QPushButton()
        self.btn_vis_stars.setIcon(self.style().standardIcon(QStyle.SP_DialogApplyButton))
        self.btn_vis_stars.setCheckable(True)
        self.btn_vis_stars.setChecked(True)
        self.btn_vis_stars.setToolTip("Show stars")
        self.btn_vis_stars.toggled.connect(self.on_toggle_stars)
        layout.addWidget(self.btn_vis_stars)

        btn_reset = QPushButton()
        btn_reset.setIcon(self.style().standardIcon(QStyle.SP_BrowserReload))
        btn_reset.setToolTip("Reset camera")
        btn_reset.clicked.connect(self.reset_camera)
        layout.addWidget(btn_reset)

        self._visible_stars = self.btn_vis_stars.isChecked()
        self.overlay_widget.adjustSize()

    # --- Toggle Slots ---
    def on_toggle_stars(self, checked: bool) -> None:
        self._visible_stars = checked
        self._apply_visibility()
        self.plotter.render()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self.overlay_widget.move(self.width() - self.overlay_widget.width() - 10, 10)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
