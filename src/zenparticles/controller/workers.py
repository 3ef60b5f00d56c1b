"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for tasks that must not run on the
GUI thread.

Why is this file needed?
------------------------
1. Responsiveness: Polling a gesture source can block (camera, network).
   The animation tick must never wait on it, so polling lives on a
   background thread.
2. Signals: They provide a safe way to update the GUI (level bars, status)
   from the background thread using Qt Signals.

Classes:
    GestureWorker: Polls a GestureSource and feeds the InteractionMailbox.
"""
import logging
from PySide6.QtCore import QThread, Signal

from zenparticles import config
from zenparticles.controller.gesture import GestureSource
from zenparticles.model.interaction import InteractionMailbox, coerce_sample

logger = logging.getLogger(__name__)


class GestureWorker(QThread):
    # Signals to update the UI from the background
    connected = Signal()
    disconnected = Signal()
    sample_received = Signal(object)  # smoothed InteractionState
    error_occurred = Signal(str)

    def __init__(
        self,
        source: GestureSource,
        mailbox: InteractionMailbox,
        rate_hz: float = config.GESTURE_RATE_HZ
    ) -> None:
        super().__init__()
        self.source = source
        self.mailbox = mailbox
        self.interval_ms = max(1, int(1000 / rate_hz)) if rate_hz > 0 else 1000
        self.is_running = True
        self.is_active = False

    def run(self):
        try:
            logger.info(f"Connecting gesture source '{self.source.name}'...")
            self.source.open()
            self.is_active = True
            self.connected.emit()

            while self.is_running:
                payload = self.source.read()
                if payload is not None:
                    state = self.mailbox.post(coerce_sample(payload))
                    self.sample_received.emit(state)
                self.msleep(self.interval_ms)

        except Exception as e:
            logger.exception(f"Error in GestureWorker: {e}")
            self.error_occurred.emit(str(e))

        finally:
            self.is_active = False
            try:
                self.source.close()
            except Exception as e:
                logger.warning(f"Could not close gesture source cleanly: {e}")
            logger.info("Gesture source disconnected.")
            self.disconnected.emit()

    def stop(self) -> None:
        self.is_running = False

    @property
    def is_stopping(self) -> bool:
        """Stop was requested but the thread has not left ``run`` yet."""
        return self.isRunning() and not self.is_running
