"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the Control Panel and the
3D particle view, and drives the animation tick.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects panel actions (shape, colour, connect) to the morph
   engine and the gesture worker.
3. Timing: A QTimer advances the MorphEngine once per display frame.
"""
from typing import Optional

import numpy as np
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QCloseEvent

import logging

from zenparticles import config
from zenparticles.controller.animation import AnimationClock, auto_rotate_degrees, should_auto_rotate
from zenparticles.controller.gesture import ScriptedGestureSource
from zenparticles.controller.morph import MorphEngine
from zenparticles.controller.workers import GestureWorker
from zenparticles.model.interaction import InteractionState
from zenparticles.model.io import IOManager
from zenparticles.model.shapes import ParticleShape, generate_shape_positions, generate_starfield
from zenparticles.model.state import SceneState
from zenparticles.view.panels.controls_panel import ControlsPanel
from zenparticles.view.widgets.particle_view import ParticleViewWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "ZenParticles 3D"


class MainWindow(QMainWindow):
    def __init__(self, scene_state: SceneState, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__()
        self.scene: SceneState = scene_state
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng()
        self.gesture_worker: Optional[GestureWorker] = None

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- CORE ---
        self.engine = MorphEngine(self.scene.particles.count, rng=self.rng)
        self.engine.set_target(
            generate_shape_positions(self.scene.shape, self.engine.count, self.rng),
            self.scene.shape
        )
        self.clock = AnimationClock()

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.controls = ControlsPanel(self.scene)
        splitter.addWidget(self.controls)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = ParticleViewWidget()
        splitter.addWidget(self.visualizer)
        splitter.setSizes([280, 1120])

        self.visualizer.init_scene(
            self.engine.rendered,
            self.scene.render,
            stars=generate_starfield(config.STAR_COUNT, config.STAR_RADIUS, config.STAR_DEPTH, self.rng),
        )

        # --- SIGNAL CONNECTIONS ---
        self.controls.shape_changed.connect(self.on_shape_changed)
        self.controls.color_changed.connect(self.on_color_changed)
        self.controls.connect_requested.connect(self.on_connect_requested)
        self.controls.disconnect_requested.connect(self.on_disconnect_requested)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

        # --- ANIMATION TIMER ---
        self.timer = QTimer(self)
        self.timer.setInterval(config.TICK_INTERVAL_MS)
        self.timer.timeout.connect(self.advance_frame)
        self.timer.start()

    def _create_actions(self) -> None:
        self.act_export = QAction("Export Frame...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_frame)

        self.act_reset = QAction("Reset Scene", self)
        self.act_reset.triggered.connect(self.on_reset_scene)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    # --- ANIMATION ---

    def advance_frame(self) -> None:
        """One display tick: morph, upload, idle camera orbit."""
        frame = self.clock.tick()
        interaction = self.scene.interaction

        rendered = self.engine.advance(interaction, frame.elapsed, frame.delta)
        if self.engine.needs_upload:
            self.visualizer.update_frame(rendered, self.engine.rotation_y)
            self.engine.mark_uploaded()

        if should_auto_rotate(self.scene.is_connected, interaction.tension):
            self.visualizer.orbit_camera(auto_rotate_degrees(frame.delta))

    # --- SLOTS ---

    def on_shape_changed(self, value: str) -> None:
        shape = ParticleShape.parse(value) or ParticleShape.SPHERE
        if not self.scene.set_shape(shape):
            return
        target = generate_shape_positions(shape, self.engine.count, self.rng)
        self.engine.set_target(target, shape)

    def on_color_changed(self, color: str) -> None:
        if self.scene.set_color(color):
            self.visualizer.set_render_config(self.scene.render)

    def on_connect_requested(self) -> None:
        if self.gesture_worker is not None and self.gesture_worker.is_stopping:
            # A stopped worker can still be inside its poll sleep; let it finish
            self._stop_gesture_worker()
        elif self.gesture_worker is not None and self.gesture_worker.isRunning():
            self.controls.set_connected(self.scene.is_connected)
            return

        if not self.scene.gesture_script:
            logger.warning("Connect requested but no gesture source is configured.")
            QMessageBox.warning(
                self, "Gesture Input",
                "No gesture source configured.\nStart the application with --gesture-script PATH."
            )
            self.controls.set_connected(False)
            return

        try:
            source = ScriptedGestureSource.from_file(self.scene.gesture_script)
        except (OSError, ValueError) as e:
            logger.error(f"Connection failed: {e}")
            QMessageBox.critical(self, "Gesture Input", f"Failed to connect the gesture source:\n{e}")
            self.controls.set_connected(False)
            return

        self.gesture_worker = GestureWorker(source, self.scene.mailbox, self.scene.gesture_rate_hz)
        self.gesture_worker.connected.connect(self.on_gesture_connected)
        self.gesture_worker.disconnected.connect(self.on_gesture_disconnected)
        self.gesture_worker.sample_received.connect(self.on_interaction_sample)
        self.gesture_worker.error_occurred.connect(self.on_gesture_error)
        self.gesture_worker.start()

    def on_disconnect_requested(self) -> None:
        if self.gesture_worker is not None:
            self.gesture_worker.stop()

    def on_gesture_connected(self) -> None:
        self.scene.is_connected = True
        self.controls.set_connected(True)
        self.controls.set_interaction(self.scene.interaction)

    def on_gesture_disconnected(self) -> None:
        # The last smoothed sample stays in the mailbox and keeps driving the tick
        self.scene.is_connected = False
        self.controls.set_connected(False)

    def on_interaction_sample(self, state: InteractionState) -> None:
        self.controls.set_interaction(state)

    def on_gesture_error(self, message: str) -> None:
        QMessageBox.warning(self, "Gesture Input", f"Gesture source error:\n{message}")

    def on_export_frame(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Frame", "frame.vtp",
            "VTK PolyData (*.vtp);;Legacy VTK (*.vtk);;PLY (*.ply)"
        )
        if not path:
            return
        try:
            IOManager.export_frame(
                self.engine.rendered, path,
                color=self.scene.particles.color, rotation_y=self.engine.rotation_y
            )
        except Exception as e:
            QMessageBox.critical(self, "Export Frame", f"Export failed:\n{e}")
            return
        self.statusBar().showMessage(f"Frame exported to {path}", 5000)

    def on_reset_scene(self) -> None:
        self.on_disconnect_requested()
        self.scene.reset()
        self.engine.set_target(
            generate_shape_positions(self.scene.shape, self.engine.count, self.rng),
            self.scene.shape
        )
        self.visualizer.set_render_config(self.scene.render)
        self.controls.set_color(self.scene.particles.color)
        self.controls.set_interaction(self.scene.interaction)
        for shape, btn in self.controls.shape_buttons.items():
            btn.setChecked(shape == self.scene.shape)

    def _stop_gesture_worker(self) -> None:
        if self.gesture_worker is None:
            return
        self.gesture_worker.stop()
        self.gesture_worker.wait(2000)
        self.gesture_worker = None

    def closeEvent(self, event: QCloseEvent) -> None:
        self.timer.stop()
        self._stop_gesture_worker()
        self.visualizer.close()
        event.accept()
