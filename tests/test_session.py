"""Tests for EditorSession state and change notification."""

from src.models.analysis import AnalysisResult
from src.models.session import AppStatus, EditorSession, EditorTab, SessionChange


def _session_with_image() -> EditorSession:
    session = EditorSession()
    session.replace_image(b"png-bytes", "image/png", 800, 600)
    return session


class _Recorder:
    def __init__(self):
        self.changes: list[SessionChange] = []

    def __call__(self, changes: SessionChange) -> None:
        self.changes.append(changes)


class TestImageReplacement:
    def test_initial_state(self):
        session = EditorSession()
        assert not session.has_image
        assert session.status == AppStatus.IDLE
        assert session.active_tab == EditorTab.CAPTION

    def test_replace_image_resets_everything(self):
        session = _session_with_image()
        session.add_caption("a")
        session.add_caption("b")
        session.apply_suggestions(["one", "two"])
        session.apply_analysis(AnalysisResult("desc", "happy", ["cat"]))
        session.set_edit_prompt("make it snow")

        session.replace_image(b"other", "image/jpeg", 320, 240)

        assert len(session.captions) == 0
        assert session.selected_id is None
        assert session.suggestions == []
        assert session.analysis is None
        assert session.edit_prompt == ""
        assert session.status == AppStatus.IDLE
        assert session.active_tab == EditorTab.CAPTION
        assert session.image.data == b"other"
        assert session.image.natural_width == 320

    def test_replace_image_notifies_once(self):
        session = _session_with_image()
        session.add_caption("a")
        rec = _Recorder()
        session.subscribe(rec)
        session.replace_image(b"other", "image/png", 10, 10)
        assert len(rec.changes) == 1
        assert rec.changes[0] & SessionChange.IMAGE
        assert rec.changes[0] & SessionChange.CAPTIONS

    def test_apply_edited_image_resets_and_marks_success(self):
        session = _session_with_image()
        session.add_caption("a")
        session.set_status(AppStatus.EDITING_IMAGE)
        session.apply_edited_image(b"edited", "image/png", 800, 600)
        assert len(session.captions) == 0
        assert session.status == AppStatus.SUCCESS
        assert session.active_tab == EditorTab.EDIT
        assert session.image.data == b"edited"


class TestCaptions:
    def test_add_caption_switches_to_style(self):
        session = _session_with_image()
        cap = session.add_caption("hello", displayed_width=500)
        assert session.selected_id == cap.id
        assert session.active_tab == EditorTab.STYLE
        assert cap.font_size == 50

    def test_remove_selected_returns_to_caption_tab(self):
        session = _session_with_image()
        cap = session.add_caption("hello")
        assert session.remove_caption(cap.id)
        assert session.selected_id is None
        assert session.active_tab == EditorTab.CAPTION

    def test_remove_unselected_keeps_tab(self):
        session = _session_with_image()
        a = session.add_caption("a")
        session.add_caption("b")
        session.remove_caption(a.id)
        assert session.active_tab == EditorTab.STYLE

    def test_update_selected_without_selection_is_noop(self):
        session = _session_with_image()
        session.add_caption("a")
        session.select_caption(None)
        assert session.update_selected(font_size=60) is None
        assert session.captions[0].font_size != 60

    def test_select_with_show_style(self):
        session = _session_with_image()
        cap = session.add_caption("a")
        session.set_active_tab(EditorTab.CAPTION)
        session.select_caption(cap.id, show_style=True)
        assert session.active_tab == EditorTab.STYLE

    def test_no_notification_for_unchanged_selection(self):
        session = _session_with_image()
        cap = session.add_caption("a")
        rec = _Recorder()
        session.subscribe(rec)
        session.select_caption(cap.id)
        assert rec.changes == []

    def test_unsubscribe(self):
        session = _session_with_image()
        rec = _Recorder()
        session.subscribe(rec)
        session.unsubscribe(rec)
        session.add_caption("a")
        assert rec.changes == []


class TestStatus:
    def test_busy_statuses(self):
        session = _session_with_image()
        for status in (AppStatus.ANALYZING, AppStatus.GENERATING_CAPTIONS, AppStatus.EDITING_IMAGE):
            session.set_status(status)
            assert session.is_busy
        for status in (AppStatus.IDLE, AppStatus.ERROR, AppStatus.SUCCESS):
            session.set_status(status)
            assert not session.is_busy

    def test_empty_suggestions_still_success(self):
        session = _session_with_image()
        session.set_status(AppStatus.GENERATING_CAPTIONS)
        session.apply_suggestions([])
        assert session.status == AppStatus.SUCCESS
        assert session.suggestions == []

    def test_apply_analysis_switches_tab(self):
        session = _session_with_image()
        session.apply_analysis(AnalysisResult("d", "m", ["k"]))
        assert session.active_tab == EditorTab.ANALYZE
        session.clear_analysis()
        assert session.analysis is None

    def test_captions_editable_while_busy(self):
        session = _session_with_image()
        cap = session.add_caption("a")
        session.set_status(AppStatus.ANALYZING)
        session.move_caption(cap.id, 20, 30)
        assert session.captions[0].x == 20
        assert session.status == AppStatus.ANALYZING
