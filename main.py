"""MemeGenius application entry point."""

import sys
from pathlib import Path

# SIGABRT 등 크래시 시 Python 트레이스백 출력 (원인 분석용)
try:
    import faulthandler
    faulthandler.enable(all_threads=True)
except Exception:
    pass

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor, QPalette

from src.utils.config import APP_NAME, ORG_NAME
from src.utils.i18n import init_language
from src.utils.log_setup import setup_logging
from src.services.settings_manager import SettingsManager
from src.ui.main_window import MainWindow


def _apply_dark_theme(app: QApplication) -> None:
    """Apply a dark color palette using the Fusion style."""
    app.setStyle("Fusion")
    palette = QPalette()

    # Base colors
    palette.setColor(QPalette.ColorRole.Window, QColor(24, 24, 27))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Base, QColor(18, 18, 20))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(39, 39, 42))
    palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(39, 39, 42))
    palette.setColor(QPalette.ColorRole.ToolTipText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Text, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Button, QColor(39, 39, 42))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.BrightText, QColor(255, 255, 255))

    # Highlight (accent)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(124, 58, 237))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))

    # Disabled
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, QColor(113, 113, 122))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, QColor(113, 113, 122))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.ButtonText, QColor(113, 113, 122))

    app.setPalette(palette)

    qss_path = Path(__file__).parent / "src" / "ui" / "styles" / "dark.qss"
    if qss_path.exists():
        app.setStyleSheet(qss_path.read_text(encoding="utf-8"))


def main() -> None:
    QApplication.setOrganizationName(ORG_NAME)
    QApplication.setApplicationName(APP_NAME)

    setup_logging()

    app = QApplication(sys.argv)
    _apply_dark_theme(app)

    # Initialize UI language from settings
    _settings = SettingsManager()
    init_language(_settings.get_ui_language())

    window = MainWindow()
    window.show()

    # Allow opening an image via command-line argument
    if len(sys.argv) > 1:
        image_path = Path(sys.argv[1])
        if image_path.is_file():
            window.load_image(image_path)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
