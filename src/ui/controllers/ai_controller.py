"""AiController — Gemini 캡션 추천 / 분석 / 이미지 편집 워커 관리."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread

from src.models.session import AppStatus
from src.services.gemini_service import GeminiService
from src.services.image_loader import load_image_bytes
from src.utils.errors import InputError
from src.utils.i18n import tr
from src.workers.gemini_worker import GeminiWorker

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext

logger = logging.getLogger(__name__)

_BUSY_STATUS = {
    GeminiWorker.CAPTIONS: AppStatus.GENERATING_CAPTIONS,
    GeminiWorker.ANALYZE: AppStatus.ANALYZING,
    GeminiWorker.EDIT: AppStatus.EDITING_IMAGE,
}


class AiController(QObject):
    """한 번에 하나의 AI 작업만 실행한다 (트리거 버튼 비활성화와 동일한 규칙)."""

    def __init__(self, ctx: AppContext) -> None:
        super().__init__(ctx.window)
        self.ctx = ctx
        self._thread: QThread | None = None
        self._worker: GeminiWorker | None = None
        self._operation: str | None = None
        self._request_image: bytes | None = None

    def is_running(self) -> bool:
        return self._operation is not None

    # ---- 트리거 ----

    def request_captions(self) -> bool:
        return self._start(GeminiWorker.CAPTIONS)

    def request_analysis(self) -> bool:
        return self._start(GeminiWorker.ANALYZE)

    def request_edit(self) -> bool:
        instruction = self.ctx.session.edit_prompt.strip()
        if not instruction:
            return False
        return self._start(GeminiWorker.EDIT, instruction)

    def _create_service(self) -> GeminiService:
        settings = self.ctx.settings
        return GeminiService(settings.get_gemini_api_key(), timeout=settings.get_request_timeout())

    def _start(self, operation: str, instruction: str = "") -> bool:
        session = self.ctx.session
        if not session.has_image:
            return False
        if session.is_busy or self.is_running():
            logger.info(f"Ignored {operation} request: another AI action is pending")
            return False

        self._operation = operation
        self._request_image = session.image.data
        session.set_status(_BUSY_STATUS[operation])

        self._thread = QThread()
        self._worker = GeminiWorker(
            self._create_service(), operation,
            session.image.data, session.image.mime_type, instruction,
        )
        self._worker.moveToThread(self._thread)
        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_finished)
        self._worker.error.connect(self._on_error)
        self._worker.finished.connect(self._cleanup_thread)
        self._worker.error.connect(self._cleanup_thread)
        self._thread.start()
        return True

    # ---- 결과 ----

    def _is_stale(self) -> bool:
        # 요청 이후 작업 이미지가 교체되었으면 결과를 버린다
        stale = self.ctx.session.image.data is not self._request_image
        self._request_image = None
        return stale

    def _on_finished(self, result) -> None:
        operation, self._operation = self._operation, None
        if self._is_stale():
            logger.info(f"Discarded {operation} result: working image changed")
            return
        session = self.ctx.session
        if operation == GeminiWorker.CAPTIONS:
            session.apply_suggestions(result)
            self.ctx.status_bar().showMessage(
                f"{len(result)} {tr('caption suggestions ready')}", 3000
            )
        elif operation == GeminiWorker.ANALYZE:
            session.apply_analysis(result)
            self.ctx.status_bar().showMessage(tr("Analysis complete"), 3000)
        elif operation == GeminiWorker.EDIT:
            data, _mime_type = result
            try:
                loaded = load_image_bytes(data)
            except InputError as e:
                self._fail(f"Edited image is unreadable: {e}")
                return
            session.apply_edited_image(loaded.data, loaded.mime_type, loaded.width, loaded.height)
            self.ctx.status_bar().showMessage(tr("Image edited"), 3000)

    def _on_error(self, message: str) -> None:
        self._operation = None
        if self._is_stale():
            logger.info(f"Discarded AI error for replaced image: {message}")
            return
        self._fail(message)

    def _fail(self, message: str) -> None:
        logger.error(f"AI action failed: {message}")
        self.ctx.session.set_status(AppStatus.ERROR)
        self.ctx.status_bar().showMessage(f"{tr('AI request failed')}: {message}", 8000)

    def _cleanup_thread(self) -> None:
        if self._thread is not None:
            self._thread.quit()
            self._thread.wait(3000)
            self._thread.deleteLater()
            self._thread = None
        if self._worker is not None:
            self._worker.deleteLater()
            self._worker = None

    def shutdown(self) -> None:
        """앱 종료 시 실행 중인 스레드 정리 (진행 중인 HTTP 요청은 중단 불가)."""
        if self._thread is not None and self._thread.isRunning():
            self._thread.quit()
            self._thread.wait(5000)
