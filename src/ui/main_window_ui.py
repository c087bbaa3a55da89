"""MainWindow UI 구성. 초기화 + 시그널 배선은 main_window.py에서 담당."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QSplitter, QStatusBar, QToolBar, QVBoxLayout, QWidget

from src.models.meme_template import builtin_templates
from src.ui.meme_canvas_widget import MemeCanvasWidget
from src.ui.source_panel import SourcePanel
from src.ui.tool_panel import ToolPanel
from src.utils.config import CANVAS_MIN_HEIGHT, CANVAS_MIN_WIDTH, TOOL_PANEL_WIDTH
from src.utils.i18n import tr


def build_main_window_ui(window) -> None:
    """window에 소스 패널 | 캔버스 | 툴 패널 스플리터를 구성한다.
    Controller 생성 전에 호출한다.
    """
    central = QWidget()
    window.setCentralWidget(central)

    window._source_panel = SourcePanel(builtin_templates())
    window._source_panel.setMinimumWidth(200)

    window._canvas = MemeCanvasWidget()
    window._canvas.setMinimumSize(CANVAS_MIN_WIDTH, CANVAS_MIN_HEIGHT)

    window._tool_panel = ToolPanel()
    window._tool_panel.setMinimumWidth(TOOL_PANEL_WIDTH)

    window._splitter = QSplitter(Qt.Orientation.Horizontal)
    window._splitter.addWidget(window._source_panel)
    window._splitter.addWidget(window._canvas)
    window._splitter.addWidget(window._tool_panel)
    window._splitter.setStretchFactor(0, 0)
    window._splitter.setStretchFactor(1, 1)
    window._splitter.setStretchFactor(2, 0)
    window._splitter.setSizes([220, 880, TOOL_PANEL_WIDTH])

    main_layout = QVBoxLayout(central)
    main_layout.setContentsMargins(0, 0, 0, 0)
    main_layout.setSpacing(0)
    main_layout.addWidget(window._splitter, 1)

    window._toolbar = QToolBar(tr("Main"))
    window._toolbar.setMovable(False)
    window.addToolBar(window._toolbar)

    window.setStatusBar(QStatusBar())
