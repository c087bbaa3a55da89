"""Gemini 호출 백그라운드 워커."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from src.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)


class GeminiWorker(QObject):
    """QThread + moveToThread 패턴으로 Gemini API 호출을 백그라운드 처리한다.

    Signals:
        finished(object): list[str] | AnalysisResult | (bytes, mime_type)
        error(str): error message on failure
    """

    finished = Signal(object)
    error = Signal(str)

    CAPTIONS = "captions"
    ANALYZE = "analyze"
    EDIT = "edit"

    def __init__(
        self,
        service: GeminiService,
        operation: str,
        image_bytes: bytes,
        mime_type: str = "image/png",
        instruction: str = "",
    ) -> None:
        super().__init__()
        if operation not in (self.CAPTIONS, self.ANALYZE, self.EDIT):
            raise ValueError(f"Unknown Gemini operation: {operation}")
        self._service = service
        self._operation = operation
        self._image_bytes = image_bytes
        self._mime_type = mime_type
        self._instruction = instruction

    @property
    def operation(self) -> str:
        return self._operation

    def run(self) -> None:
        """백그라운드 스레드에서 실행된다."""
        try:
            if self._operation == self.CAPTIONS:
                result = self._service.generate_captions(self._image_bytes, self._mime_type)
            elif self._operation == self.ANALYZE:
                result = self._service.analyze_image(self._image_bytes, self._mime_type)
            else:
                result = self._service.edit_image(self._image_bytes, self._instruction, self._mime_type)
        except Exception as e:
            logger.exception(f"Gemini {self._operation} failed")
            self.error.emit(str(e))
            return
        self.finished.emit(result)
