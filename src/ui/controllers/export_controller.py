"""ExportController — 캡션을 합성한 PNG 저장."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread

from src.utils.i18n import tr
from src.workers.export_worker import ExportWorker

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext

logger = logging.getLogger(__name__)


class ExportController(QObject):
    """내보내기 실패는 로그와 상태바 메시지로만 알린다 (세션 상태는 변경하지 않음)."""

    def __init__(self, ctx: AppContext) -> None:
        super().__init__(parent=ctx.window)
        self.ctx = ctx
        self._thread: QThread | None = None
        self._worker: ExportWorker | None = None
        self.last_export_path: str | None = None

    def is_running(self) -> bool:
        return self._thread is not None

    def on_export(self) -> bool:
        ctx = self.ctx
        session = ctx.session
        if not session.has_image:
            ctx.status_bar().showMessage(tr("Nothing to export"), 3000)
            return False
        if self.is_running():
            return False

        display_width = ctx.displayed_width()
        if display_width <= 0:
            logger.error("Export aborted: canvas has no displayed width")
            ctx.status_bar().showMessage(tr("Export failed"), 5000)
            return False

        output_dir = ctx.settings.get_export_dir()
        self._thread = QThread()
        self._worker = ExportWorker(
            session.image.data,
            list(session.captions),
            display_width,
            output_dir,
            ctx.settings.get_caption_font_path(),
        )
        self._worker.moveToThread(self._thread)
        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_finished)
        self._worker.error.connect(self._on_error)
        self._worker.finished.connect(self._cleanup_thread)
        self._worker.error.connect(self._cleanup_thread)
        ctx.status_bar().showMessage(tr("Exporting..."))
        self._thread.start()
        return True

    def _on_finished(self, path: str) -> None:
        self.last_export_path = path
        self.ctx.status_bar().showMessage(f"{tr('Meme saved')}: {path}", 5000)

    def _on_error(self, message: str) -> None:
        logger.error(f"Export failed: {message}")
        self.ctx.status_bar().showMessage(f"{tr('Export failed')}: {message}", 8000)

    def _cleanup_thread(self) -> None:
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait(3000)
            self._thread.deleteLater()
            self._thread = None
        if self._worker is not None:
            self._worker.deleteLater()
            self._worker = None
