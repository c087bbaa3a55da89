"""pytest 공통 설정."""

import os

# Qt 위젯 테스트를 디스플레이 없이 실행
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
