"""AppContext — Controller 간 공유 상태 및 위젯 참조.

MainWindow가 초기화 후 이 객체를 생성하여 모든 Controller에 주입한다.
Controller는 self.ctx 로 접근.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from PySide6.QtWidgets import QMainWindow, QStatusBar

    from src.models.session import EditorSession
    from src.services.settings_manager import SettingsManager
    from src.ui.caption_interaction import CaptionInteraction
    from src.ui.meme_canvas_widget import MemeCanvasWidget
    from src.ui.source_panel import SourcePanel
    from src.ui.tool_panel import ToolPanel


class AppContext:
    """Controller들이 공유하는 상태 및 위젯 참조 컨테이너.

    모든 필드는 MainWindow.__init__ 이후 설정됨.
    """

    def __init__(self) -> None:
        # ---- Core state ----
        self.session: EditorSession = None  # type: ignore[assignment]
        self.interaction: CaptionInteraction = None  # type: ignore[assignment]
        self.settings: SettingsManager = None  # type: ignore[assignment]
        self.window: QMainWindow = None  # type: ignore[assignment]

        # ---- UI Widgets ----
        self.canvas: MemeCanvasWidget = None  # type: ignore[assignment]
        self.tool_panel: ToolPanel = None  # type: ignore[assignment]
        self.source_panel: SourcePanel = None  # type: ignore[assignment]

        # ---- Controller 참조 (MainWindow가 설정) ----
        self.caption_ctrl: Any = None
        self.image_ctrl: Any = None
        self.ai_ctrl: Any = None
        self.export_ctrl: Any = None

        # ---- MainWindow 콜백 (Controller에서 호출) ----
        self.refresh_all: Callable[[], None] = lambda: None

    def status_bar(self) -> QStatusBar:
        """편의 메서드: MainWindow의 상태바 접근."""
        return self.window.statusBar()

    def displayed_width(self) -> float:
        """현재 캔버스에 표시된 이미지 폭 (px). 캔버스가 없으면 0."""
        if self.canvas is None:
            return 0.0
        return self.canvas.displayed_width()
