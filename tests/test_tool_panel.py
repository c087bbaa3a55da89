"""ToolPanel Style 탭 테스트 (offscreen QApplication)."""

import io

import pytest
from PIL import Image
from PySide6.QtWidgets import QApplication

from src.models.session import EditorSession
from src.ui.tool_panel import ToolPanel

_app = QApplication.instance() or QApplication([])


def _session_with_caption(text: str = "hello") -> EditorSession:
    buf = io.BytesIO()
    Image.new("RGB", (80, 60), (0, 0, 0)).save(buf, format="PNG")
    session = EditorSession()
    session.replace_image(buf.getvalue(), "image/png", 80, 60)
    session.add_caption(text, 400.0)
    return session


@pytest.fixture
def panel():
    widget = ToolPanel()
    edits = []
    widget.style_edited.connect(edits.append)
    widget.edits = edits
    yield widget
    widget.close()


class TestStyleTab:
    def test_refresh_shows_text_without_emitting(self, panel):
        panel.refresh(_session_with_caption("hello"))
        assert panel._text_edit.text() == "hello"
        assert panel.edits == []

    def test_typing_emits_text_edit(self, panel):
        panel.refresh(_session_with_caption())
        panel._text_edit.setText("one does not simply")
        assert panel.edits[-1] == {"text": "one does not simply"}

    def test_half_pixel_stroke_survives_refresh(self, panel):
        session = _session_with_caption()
        session.update_selected(stroke_width=4.5)
        panel.refresh(session)
        assert panel._stroke_slider.value() == 9
        assert panel._stroke_label.text() == "4.5px"
        assert panel.edits == []

    def test_stroke_slider_emits_half_steps(self, panel):
        panel.refresh(_session_with_caption())
        panel._stroke_slider.setValue(7)
        assert panel.edits[-1] == {"stroke_width": 3.5}
