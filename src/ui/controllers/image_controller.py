"""ImageController — 이미지 업로드 / 템플릿 다운로드."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread
from PySide6.QtWidgets import QFileDialog

from src.models.meme_template import MemeTemplate
from src.services.image_loader import LoadedImage, load_image_file
from src.utils.config import IMAGE_FILTER
from src.utils.errors import InputError
from src.utils.i18n import tr
from src.workers.image_load_worker import TemplateLoadWorker

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext

logger = logging.getLogger(__name__)


class ImageController(QObject):
    """작업 이미지를 교체한다. 실패 시 기존 세션은 그대로 유지."""

    def __init__(self, ctx: AppContext) -> None:
        super().__init__(parent=ctx.window)
        self.ctx = ctx
        self._template_thread: QThread | None = None
        self._template_worker: TemplateLoadWorker | None = None
        self._pending_template: MemeTemplate | None = None

    # ---- 업로드 ----

    def on_upload(self) -> None:
        ctx = self.ctx
        last_dir = ctx.settings.get_last_image_dir()
        path, _ = QFileDialog.getOpenFileName(ctx.window, tr("Open Image"), last_dir, IMAGE_FILTER)
        if not path:
            return
        ctx.settings.set_last_image_dir(str(Path(path).parent))
        self.load_file(Path(path))

    def load_file(self, path: Path) -> bool:
        try:
            loaded = load_image_file(path)
        except InputError as e:
            logger.warning(f"Rejected image {path}: {e}")
            self.ctx.status_bar().showMessage(f"{tr('Could not open image')}: {e}", 5000)
            return False
        self._apply(loaded, path.name)
        return True

    # ---- 템플릿 ----

    def on_template_selected(self, template: MemeTemplate) -> None:
        if self._template_thread is not None:
            logger.info(f"Template download already running, ignored {template.template_id}")
            return
        ctx = self.ctx
        self._pending_template = template
        if ctx.source_panel is not None:
            ctx.source_panel.set_loading(True)
        ctx.status_bar().showMessage(f"{tr('Loading')} {template.name}...")

        self._template_thread = QThread()
        self._template_worker = TemplateLoadWorker(template.url, ctx.settings.get_request_timeout())
        self._template_worker.moveToThread(self._template_thread)
        self._template_thread.started.connect(self._template_worker.run)
        self._template_worker.finished.connect(self._on_template_loaded)
        self._template_worker.error.connect(self._on_template_error)
        self._template_worker.finished.connect(self._cleanup_template_thread)
        self._template_worker.error.connect(self._cleanup_template_thread)
        self._template_thread.start()

    def _on_template_loaded(self, loaded: LoadedImage) -> None:
        template, self._pending_template = self._pending_template, None
        self._apply(loaded, template.name if template else "template")

    def _on_template_error(self, message: str) -> None:
        template, self._pending_template = self._pending_template, None
        name = template.name if template else "template"
        logger.warning(f"Template {name} failed to load: {message}")
        self.ctx.status_bar().showMessage(f"{tr('Could not load template')}: {message}", 5000)

    def _cleanup_template_thread(self) -> None:
        if self.ctx.source_panel is not None:
            self.ctx.source_panel.set_loading(False)
        if self._template_thread is not None:
            self._template_thread.quit()
            self._template_thread.wait(3000)
            self._template_thread.deleteLater()
            self._template_thread = None
        if self._template_worker is not None:
            self._template_worker.deleteLater()
            self._template_worker = None

    # ---- 공통 ----

    def _apply(self, loaded: LoadedImage, label: str) -> None:
        self.ctx.session.replace_image(loaded.data, loaded.mime_type, loaded.width, loaded.height)
        logger.info(f"Loaded {label} ({loaded.width}x{loaded.height}, {loaded.mime_type})")
        self.ctx.status_bar().showMessage(
            f"{tr('Loaded')}: {label} ({loaded.width}x{loaded.height})", 3000
        )
