"""
Scene Control Panel
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QGroupBox, QProgressBar,
    QButtonGroup, QColorDialog, QFormLayout
)
from PySide6.QtCore import Signal, Qt
from PySide6.QtGui import QColor

from zenparticles.model.interaction import InteractionState, clamp01
from zenparticles.model.shapes import ParticleShape
from zenparticles.model.state import SceneState


class ControlsPanel(QWidget):
    shape_changed = Signal(str)
    color_changed = Signal(str)
    connect_requested = Signal()
    disconnect_requested = Signal()

    def __init__(self, scene_state: SceneState) -> None:
        super().__init__()
        self.scene = scene_state
        self._is_connected = False

        layout = QVBoxLayout(self)

        # --- Header ---
        title = QLabel("ZenParticles 3D")
        title.setStyleSheet("font-size: 20px; font-weight: bold; color: #818cf8;")
        layout.addWidget(title)
        subtitle = QLabel("Interactive Generative Art")
        subtitle.setStyleSheet("color: gray; font-size: 11px;")
        layout.addWidget(subtitle)

        # --- Gesture Source ---
        grp_vision = QGroupBox("Gesture Input")
        l_vision = QVBoxLayout(grp_vision)

        self.btn_connect = QPushButton()
        self.btn_connect.setMinimumHeight(36)
        self.btn_connect.clicked.connect(self.on_connect_clicked)
        l_vision.addWidget(self.btn_connect)

        # Level bars (only meaningful while connected)
        self.levels_widget = QWidget()
        form_levels = QFormLayout(self.levels_widget)
        form_levels.setContentsMargins(0, 0, 0, 0)
        self.bar_tension = self._make_level_bar("#f87171")
        self.bar_expansion = self._make_level_bar("#60a5fa")
        form_levels.addRow("Tension", self.bar_tension)
        form_levels.addRow("Expansion", self.bar_expansion)
        l_vision.addWidget(self.levels_widget)

        layout.addWidget(grp_vision)

        # --- Shape Selector ---
        grp_shape = QGroupBox("Shape")
        l_shape = QVBoxLayout(grp_shape)
        self.shape_group = QButtonGroup(self)
        self.shape_group.setExclusive(True)
        self.shape_buttons: dict[ParticleShape, QPushButton] = {}
        for shape in ParticleShape:
            btn = QPushButton(shape.value)
            btn.setCheckable(True)
            btn.setChecked(shape == self.scene.shape)
            btn.clicked.connect(lambda _checked=False, s=shape: self.on_shape_clicked(s))
            self.shape_group.addButton(btn)
            self.shape_buttons[shape] = btn
            l_shape.addWidget(btn)
        layout.addWidget(grp_shape)

        # --- Color Picker ---
        grp_color = QGroupBox("Color")
        l_color = QHBoxLayout(grp_color)
        self.btn_color = QPushButton()
        self.btn_color.setFixedSize(32, 32)
        self.btn_color.clicked.connect(self.on_color_clicked)
        l_color.addWidget(self.btn_color)
        self.lbl_color = QLabel()
        l_color.addWidget(self.lbl_color)
        l_color.addStretch()
        layout.addWidget(grp_color)

        layout.addStretch()

        self._update_color_swatch(self.scene.particles.color)
        self.set_connected(False)

    @staticmethod
    def _make_level_bar(color: str) -> QProgressBar:
        bar = QProgressBar()
        bar.setRange(0, 100)
        bar.setTextVisible(False)
        bar.setFixedHeight(8)
        bar.setStyleSheet(f"QProgressBar::chunk {{ background-color: {color}; }}")
        return bar

    def _update_color_swatch(self, color: str) -> None:
        self.btn_color.setStyleSheet(f"background-color: {color}; border-radius: 16px;")
        self.lbl_color.setText(color)

    # --- PUBLIC API ---

    def set_connected(self, connected: bool) -> None:
        self._is_connected = connected
        if connected:
            self.btn_connect.setText("Vision Active")
            self.btn_connect.setToolTip("Click to disconnect the gesture source")
            self.btn_connect.setStyleSheet("color: #4ade80; font-weight: bold;")
        else:
            self.btn_connect.setText("Start Camera")
            self.btn_connect.setToolTip("")
            self.btn_connect.setStyleSheet("")
        self.btn_connect.setEnabled(True)
        self.levels_widget.setVisible(connected)

    def set_color(self, color: str) -> None:
        self._update_color_swatch(color)

    def set_interaction(self, state: InteractionState) -> None:
        self.bar_tension.setValue(int(round(clamp01(state.tension) * 100)))
        self.bar_expansion.setValue(int(round(clamp01(state.expansion) * 100)))

    # --- SLOTS ---

    def on_connect_clicked(self) -> None:
        if self._is_connected:
            self.disconnect_requested.emit()
        else:
            self.btn_connect.setEnabled(False)
            self.btn_connect.setText("Connecting...")
            self.connect_requested.emit()

    def on_shape_clicked(self, shape: ParticleShape) -> None:
        self.shape_changed.emit(shape.value)

    def on_color_clicked(self) -> None:
        color = QColorDialog.getColor(QColor(self.scene.particles.color), self, "Particle Color")
        if not color.isValid():
            return
        hex_color = color.name()
        self._update_color_swatch(hex_color)
        self.color_changed.emit(hex_color)
