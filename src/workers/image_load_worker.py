"""Background worker for template downloads."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from src.services.image_loader import fetch_template


class TemplateLoadWorker(QObject):
    """Fetches a template image in a background thread.

    Signals:
        finished(object): LoadedImage on success
        error(str): error message on failure
    """

    finished = Signal(object)
    error = Signal(str)

    def __init__(self, url: str, timeout: float = 30):
        super().__init__()
        self._url = url
        self._timeout = timeout

    def run(self) -> None:
        try:
            loaded = fetch_template(self._url, self._timeout)
        except Exception as e:
            self.error.emit(str(e))
            return
        self.finished.emit(loaded)
