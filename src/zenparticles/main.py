"""
Application Initialization
==========================
This module resolves the command line, constructs the state and the main
window, and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses command-line overrides of the defaults in ``zenparticles.config``.
2. Instantiates the Scene State (Model).
3. Instantiates the Main Window (View) and passes the model in.
4. Prevents circular import errors by being the orchestrator.
"""
import argparse
import os
import logging
import sys
from typing import Optional

from zenparticles import config
from zenparticles.logging_config import setup_logging
from zenparticles.model.interaction import InteractionMailbox
from zenparticles.model.shapes import ParticleShape
from zenparticles.model.state import ParticleConfig, SceneState

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gesture-driven morphing particle cloud")
    parser.add_argument("--count", type=int, default=config.PARTICLE_COUNT, help="number of particles")
    parser.add_argument(
        "--shape", default=config.DEFAULT_SHAPE,
        choices=[shape.value for shape in ParticleShape], help="initial shape"
    )
    parser.add_argument("--color", default=config.DEFAULT_COLOR, help="initial particle colour (hex)")
    parser.add_argument(
        "--gesture-script",
        default=config.DEMO_GESTURE_SCRIPT if os.path.exists(config.DEMO_GESTURE_SCRIPT) else None,
        help="JSON list of {tension, expansion} samples (defaults to the bundled demo)"
    )
    parser.add_argument(
        "--gesture-rate", type=float, default=config.GESTURE_RATE_HZ, help="gesture polling rate (Hz)"
    )
    parser.add_argument(
        "--no-clamp", action="store_true", help="do not clamp smoothed interaction values to [0, 1]"
    )
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level"
    )
    parser.add_argument("--log-file", default=None, help="optional log file path")
    args = parser.parse_args(argv)

    if args.count <= 0:
        parser.error("--count must be a positive integer")
    if args.gesture_rate <= 0:
        parser.error("--gesture-rate must be positive")
    return args


def build_scene_state(args: argparse.Namespace) -> SceneState:
    return SceneState(
        particles=ParticleConfig(
            count=args.count,
            color=args.color,
            shape=ParticleShape(args.shape),
        ),
        mailbox=InteractionMailbox(clamp=not args.no_clamp),
        gesture_script=args.gesture_script,
        gesture_rate_hz=args.gesture_rate,
    )


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # Qt and VTK are only needed once we actually open a window
    from PySide6.QtWidgets import QApplication
    from zenparticles.view.main_window import MainWindow

    # 2. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName("ZenParticles 3D")

    # 3. Initialize the Data Model
    scene = build_scene_state(args)
    logger.info(f"Starting with {scene.particles.count} particles, shape {scene.shape}.")

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(scene)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
