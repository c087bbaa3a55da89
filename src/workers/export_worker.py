"""Background worker for meme export."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from src.models.caption import Caption
from src.services.meme_compositor import export_meme

logger = logging.getLogger(__name__)


class ExportWorker(QObject):
    """Composes and writes the meme in a background thread.

    Signals:
        finished(str): output path on success
        error(str): error message on failure
    """

    finished = Signal(str)
    error = Signal(str)

    def __init__(
        self,
        image_bytes: bytes,
        captions: list[Caption],
        display_width: float,
        output_dir: Path,
        font_path: str | None = None,
    ):
        super().__init__()
        self._image_bytes = image_bytes
        self._captions = list(captions)  # snapshot at request time
        self._display_width = display_width
        self._output_dir = output_dir
        self._font_path = font_path

    def run(self) -> None:
        try:
            path = export_meme(
                self._image_bytes,
                self._captions,
                self._display_width,
                self._output_dir,
                font_path=self._font_path,
            )
        except Exception as e:
            logger.exception("Meme export failed")
            self.error.emit(str(e))
            return
        self.finished.emit(str(path))
