"""
Qt worker that runs the password sampler off the GUI thread.

Only QtCore is used here so the worker can be driven without a display.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from .sampler import GenerationRequest, PasswordSampler

logger = logging.getLogger(__name__)


class GeneratorWorker(QObject):
    """
    Runs one GenerationRequest. Move it to a QThread and start `run`.

    Signals are emitted from the worker thread; connections to GUI objects
    are queued back to the GUI thread by Qt.
    """

    # (index, total) before each password
    progress = Signal(int, int)
    # (1-based index, password) for each produced password
    passwordGenerated = Signal(int, str)
    # GenerationResult once the run is over, completed or cancelled
    finished = Signal(object)
    # Error text if the run died unexpectedly
    failed = Signal(str)

    def __init__(
        self,
        request: GenerationRequest,
        rng: random.Random | None = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.sampler = PasswordSampler(request)
        self.rng = rng

    @property
    def context(self):
        return self.sampler.context

    @Slot()
    def run(self) -> None:
        try:
            result = self.sampler.run(
                on_item=self.passwordGenerated.emit,
                on_progress=self.progress.emit,
                rng=self.rng,
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Password generation failed")
            self.failed.emit(str(exc))
            return
        self.finished.emit(result)

    def cancel(self) -> None:
        """Request a stop. Safe to call from any thread."""
        self.sampler.cancel()
