"""UI Controllers — MainWindow 책임 분리.

AppContext를 통해 공유 상태에 접근한다.
워커를 다루는 Controller는 QObject를 상속하여 시그널/슬롯이 메인 스레드로 전달되게 한다.
"""

from src.ui.controllers.ai_controller import AiController
from src.ui.controllers.app_context import AppContext
from src.ui.controllers.caption_controller import CaptionController
from src.ui.controllers.export_controller import ExportController
from src.ui.controllers.image_controller import ImageController

__all__ = [
    "AiController",
    "AppContext",
    "CaptionController",
    "ExportController",
    "ImageController",
]
