"""
Logging Configuration
Sets up the application logger and keeps render-library chatter out of it.
"""
import logging
import sys
from typing import Optional, Union

APP_LOGGER = "zenparticles"
# Libraries that log every render call at INFO; only their warnings reach the console
QUIET_LOGGERS = ("pyvista", "pyvistaqt")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def resolve_level(level: Union[int, str]) -> int:
    """Accepts ``logging.DEBUG`` or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'zenparticles' logger with a stdout handler and, when
    ``log_file`` is given, a file handler truncated at start-up.

    Calling it again replaces the handlers instead of stacking them.
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    library_level = numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger.info(f"Logging initialized at {logging.getLevelName(numeric_level)}.")
    return logger
