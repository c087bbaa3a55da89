"""MainWindow 메뉴/툴바 구성. Controller 생성 후 호출한다."""

from PySide6.QtGui import QAction, QActionGroup, QKeySequence

from src.utils.i18n import LANGUAGES, current_language, tr


def build_main_window_menu(window) -> None:
    """window에 메뉴바를 구성한다. window._image_ctrl, _export_ctrl, _ai_ctrl, _caption_ctrl 필요."""
    menubar = window.menuBar()

    file_menu = menubar.addMenu(tr("&File"))

    open_action = QAction(tr("&Open Image..."), window)
    open_action.setShortcut(QKeySequence("Ctrl+O"))
    open_action.triggered.connect(window._image_ctrl.on_upload)
    file_menu.addAction(open_action)

    window._export_action = QAction(tr("&Export Meme"), window)
    window._export_action.setShortcut(QKeySequence("Ctrl+E"))
    window._export_action.triggered.connect(window._export_ctrl.on_export)
    file_menu.addAction(window._export_action)

    file_menu.addSeparator()

    api_key_action = QAction(tr("Set Gemini &API Key..."), window)
    api_key_action.triggered.connect(window._on_set_api_key)
    file_menu.addAction(api_key_action)

    export_dir_action = QAction(tr("Choose Export &Folder..."), window)
    export_dir_action.triggered.connect(window._on_choose_export_dir)
    file_menu.addAction(export_dir_action)

    language_menu = file_menu.addMenu(tr("&Language"))
    language_group = QActionGroup(window)
    for code, (label, _strings) in LANGUAGES.items():
        action = QAction(label, window)
        action.setCheckable(True)
        action.setChecked(code == current_language())
        action.triggered.connect(lambda _checked=False, c=code: window._on_language_selected(c))
        language_group.addAction(action)
        language_menu.addAction(action)

    file_menu.addSeparator()

    quit_action = QAction(tr("&Quit"), window)
    quit_action.setShortcut(QKeySequence("Ctrl+Q"))
    quit_action.triggered.connect(window.close)
    file_menu.addAction(quit_action)

    edit_menu = menubar.addMenu(tr("&Edit"))
    delete_action = QAction(tr("&Delete Caption"), window)
    delete_action.setShortcut(QKeySequence.StandardKey.Delete)
    delete_action.triggered.connect(window._caption_ctrl.on_delete_selected)
    edit_menu.addAction(delete_action)

    ai_menu = menubar.addMenu(tr("&AI"))
    window._magic_action = QAction(tr("&Magic Caption"), window)
    window._magic_action.setShortcut(QKeySequence("Ctrl+M"))
    window._magic_action.triggered.connect(window._ai_ctrl.request_captions)
    ai_menu.addAction(window._magic_action)

    window._analyze_action = QAction(tr("&Analyze Image"), window)
    window._analyze_action.triggered.connect(window._ai_ctrl.request_analysis)
    ai_menu.addAction(window._analyze_action)

    help_menu = menubar.addMenu(tr("&Help"))
    about_action = QAction(tr("&About"), window)
    about_action.triggered.connect(window._on_about)
    help_menu.addAction(about_action)

    toolbar = window._toolbar
    toolbar.addAction(open_action)
    toolbar.addAction(window._export_action)
