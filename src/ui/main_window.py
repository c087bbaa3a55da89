"""Main application window."""

import logging
from pathlib import Path

from PySide6.QtCore import QSettings
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QFileDialog, QInputDialog, QLineEdit, QMainWindow, QMessageBox

from src.models.session import AppStatus, EditorSession, SessionChange
from src.services.settings_manager import SettingsManager
from src.ui.caption_interaction import CaptionInteraction
from src.ui.controllers.ai_controller import AiController
from src.ui.controllers.app_context import AppContext
from src.ui.controllers.caption_controller import CaptionController
from src.ui.controllers.export_controller import ExportController
from src.ui.controllers.image_controller import ImageController
from src.ui.main_window_menu import build_main_window_menu
from src.ui.main_window_ui import build_main_window_ui
from src.utils.config import APP_NAME, APP_VERSION, IMAGE_EXTENSIONS
from src.utils.i18n import tr

logger = logging.getLogger(__name__)

# busy overlay 메시지 (AI 작업 중에만 표시)
BUSY_MESSAGES = {
    AppStatus.ANALYZING: "Analyzing pixels...",
    AppStatus.GENERATING_CAPTIONS: "Thinking of something funny...",
    AppStatus.EDITING_IMAGE: "Working magic on the image...",
}


def busy_message(status: AppStatus) -> str:
    """status에 해당하는 오버레이 문구. 바쁘지 않으면 빈 문자열."""
    key = BUSY_MESSAGES.get(status)
    return tr(key) if key else ""


class MainWindow(QMainWindow):
    def __init__(self, session: EditorSession | None = None) -> None:
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1100, 700)
        self.resize(1360, 860)

        icon_path = Path(__file__).resolve().parent.parent.parent / "resources" / "icon.png"
        if icon_path.is_file():
            self.setWindowIcon(QIcon(str(icon_path)))

        self.setAcceptDrops(True)

        self._session = session or EditorSession()
        self._settings = SettingsManager()

        build_main_window_ui(self)

        # ---- Controllers ----
        self._ctx = AppContext()
        self._ctx.session = self._session
        self._ctx.interaction = CaptionInteraction(self._session)
        self._ctx.settings = self._settings
        self._ctx.window = self
        self._ctx.canvas = self._canvas
        self._ctx.tool_panel = self._tool_panel
        self._ctx.source_panel = self._source_panel
        self._ctx.refresh_all = self._refresh_all

        self._caption_ctrl = CaptionController(self._ctx)
        self._image_ctrl = ImageController(self._ctx)
        self._ai_ctrl = AiController(self._ctx)
        self._export_ctrl = ExportController(self._ctx)
        self._ctx.caption_ctrl = self._caption_ctrl
        self._ctx.image_ctrl = self._image_ctrl
        self._ctx.ai_ctrl = self._ai_ctrl
        self._ctx.export_ctrl = self._export_ctrl

        build_main_window_menu(self)
        self._connect_signals()

        self._session.subscribe(self._on_session_changed)
        self._restore_geometry()
        self._refresh_all()
        self.statusBar().showMessage(tr("Upload an image or pick a template to start"))

    # ------------------------------------------------------------ Wiring

    def _connect_signals(self) -> None:
        canvas = self._canvas
        canvas.caption_pressed.connect(self._caption_ctrl.on_caption_pressed)
        canvas.caption_drag_started.connect(self._caption_ctrl.on_caption_drag_started)
        canvas.caption_dropped.connect(self._caption_ctrl.on_caption_dropped)
        canvas.caption_delete_clicked.connect(self._caption_ctrl.on_caption_delete_clicked)
        canvas.background_clicked.connect(self._caption_ctrl.on_background_clicked)

        panel = self._tool_panel
        panel.caption_chosen.connect(self._caption_ctrl.on_caption_chosen)
        panel.style_edited.connect(self._caption_ctrl.on_style_edited)
        panel.delete_selected_requested.connect(self._caption_ctrl.on_delete_selected)
        panel.tab_selected.connect(self._caption_ctrl.on_tab_selected)
        panel.edit_prompt_changed.connect(self._caption_ctrl.on_edit_prompt_changed)
        panel.analysis_dismissed.connect(self._caption_ctrl.on_analysis_dismissed)
        panel.magic_caption_requested.connect(self._ai_ctrl.request_captions)
        panel.analyze_requested.connect(self._ai_ctrl.request_analysis)
        panel.edit_requested.connect(self._ai_ctrl.request_edit)

        self._source_panel.upload_requested.connect(self._image_ctrl.on_upload)
        self._source_panel.template_selected.connect(self._image_ctrl.on_template_selected)

    # ------------------------------------------------------------ Refresh

    def _on_session_changed(self, changes: SessionChange) -> None:
        session = self._session
        if changes & SessionChange.IMAGE:
            self._canvas.set_image(session.image)
        if changes & (SessionChange.IMAGE | SessionChange.CAPTIONS | SessionChange.SELECTION):
            self._canvas.set_captions(list(session.captions), session.selected_id)
            self._ctx.interaction.sync()
        if changes & SessionChange.STATUS:
            self._canvas.set_busy_message(busy_message(session.status))
        self._tool_panel.refresh(session)
        self._update_actions()

    def _refresh_all(self) -> None:
        session = self._session
        self._canvas.set_image(session.image)
        self._canvas.set_captions(list(session.captions), session.selected_id)
        self._canvas.set_busy_message(busy_message(session.status))
        self._tool_panel.refresh(session)
        self._update_actions()

    def _update_actions(self) -> None:
        has_image = self._session.has_image
        busy = self._session.is_busy
        self._export_action.setEnabled(has_image)
        self._magic_action.setEnabled(has_image and not busy)
        self._analyze_action.setEnabled(has_image and not busy)

    # ------------------------------------------------------------ Settings actions

    def _on_set_api_key(self) -> None:
        key, ok = QInputDialog.getText(
            self, tr("Gemini API Key"), tr("API key:"),
            QLineEdit.EchoMode.Password, self._settings.get_gemini_api_key(),
        )
        if ok:
            self._settings.set_gemini_api_key(key.strip())
            self.statusBar().showMessage(tr("API key saved"), 3000)

    def _on_choose_export_dir(self) -> None:
        path = QFileDialog.getExistingDirectory(
            self, tr("Choose Export Folder"), str(self._settings.get_export_dir())
        )
        if path:
            self._settings.set_export_dir(Path(path))
            self.statusBar().showMessage(f"{tr('Export folder')}: {path}", 3000)

    def _on_language_selected(self, lang_code: str) -> None:
        if lang_code == self._settings.get_ui_language():
            return
        self._settings.set_ui_language(lang_code)
        # 위젯 문자열은 시작 시 한 번만 번역된다
        self.statusBar().showMessage(tr("Language will change after restart"), 5000)

    def _on_about(self) -> None:
        QMessageBox.about(
            self,
            f"{tr('About')} {APP_NAME}",
            f"{APP_NAME} v{APP_VERSION}\n\n"
            f"{tr('Meme editor with Gemini-powered captions, analysis and image edits.')}",
        )

    # ------------------------------------------------------------ Drag & drop

    @staticmethod
    def _is_supported_file(url) -> bool:
        return Path(url.toLocalFile()).suffix.lower() in IMAGE_EXTENSIONS

    def dragEnterEvent(self, event) -> None:
        if event.mimeData().hasUrls():
            if any(self._is_supported_file(url) for url in event.mimeData().urls()):
                event.acceptProposedAction()

    def dropEvent(self, event) -> None:
        if not event.mimeData().hasUrls():
            return
        urls = event.mimeData().urls()
        if not urls:
            return
        # 첫 번째 파일만 사용
        path = Path(urls[0].toLocalFile())
        if path.is_file():
            self._image_ctrl.load_file(path)

    # ------------------------------------------------------------ Lifecycle

    def load_image(self, path: Path) -> bool:
        """커맨드라인 인자 등 외부에서 이미지 로드."""
        return self._image_ctrl.load_file(path)

    def _restore_geometry(self) -> None:
        settings = QSettings()
        geometry = settings.value("window_geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)

    def closeEvent(self, event) -> None:
        settings = QSettings()
        settings.setValue("window_geometry", self.saveGeometry())
        self._session.unsubscribe(self._on_session_changed)
        self._ai_ctrl.shutdown()
        self._settings.sync()
        super().closeEvent(event)
