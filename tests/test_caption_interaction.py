"""Tests for the canvas pointer state machine."""

from src.models.session import EditorSession, EditorTab
from src.ui.caption_interaction import CaptionInteraction, InteractionState
from src.utils.coords import ImageBox

BOX = ImageBox(50, 20, 400, 300)


def _setup():
    session = EditorSession()
    session.replace_image(b"img", "image/png", 800, 600)
    cap = session.add_caption("hello")
    session.select_caption(None)
    session.set_active_tab(EditorTab.CAPTION)
    return session, CaptionInteraction(session), cap


class TestPressAndSelect:
    def test_press_selects_and_shows_style(self):
        session, inter, cap = _setup()
        inter.press(cap.id)
        assert inter.state is InteractionState.SELECTED
        assert session.selected_id == cap.id
        assert session.active_tab == EditorTab.STYLE

    def test_press_unknown_id_ignored(self):
        session, inter, _cap = _setup()
        inter.press("missing")
        assert inter.state is InteractionState.IDLE
        assert session.selected_id is None

    def test_background_click_deselects(self):
        session, inter, cap = _setup()
        inter.press(cap.id)
        inter.click_background()
        assert inter.state is InteractionState.IDLE
        assert session.selected_id is None


class TestDrag:
    def test_drag_moves_caption(self):
        session, inter, cap = _setup()
        inter.begin_drag(cap.id)
        assert inter.state is InteractionState.DRAGGING
        result = inter.end_drag(250, 170, BOX)
        assert result == (50.0, 50.0)
        assert session.captions.get(cap.id).x == 50.0
        assert session.captions.get(cap.id).y == 50.0
        assert inter.state is InteractionState.SELECTED
        assert session.selected_id == cap.id

    def test_drag_to_exact_edge(self):
        session, inter, cap = _setup()
        inter.begin_drag(cap.id)
        inter.end_drag(450, 320, BOX)
        moved = session.captions.get(cap.id)
        assert (moved.x, moved.y) == (100.0, 100.0)

    def test_drag_beyond_edges_clamped(self):
        session, inter, cap = _setup()
        inter.begin_drag(cap.id)
        inter.end_drag(-1000, 5000, BOX)
        moved = session.captions.get(cap.id)
        assert (moved.x, moved.y) == (0.0, 100.0)

    def test_empty_box_drops_drag(self):
        session, inter, cap = _setup()
        inter.begin_drag(cap.id)
        assert inter.end_drag(10, 10, ImageBox(0, 0, 0, 0)) is None
        moved = session.captions.get(cap.id)
        assert (moved.x, moved.y) == (50.0, 15.0)
        assert inter.state is InteractionState.SELECTED

    def test_end_drag_without_begin_is_noop(self):
        session, inter, cap = _setup()
        assert inter.end_drag(250, 170, BOX) is None
        assert session.captions.get(cap.id).y == 15.0

    def test_background_click_ignored_while_dragging(self):
        _session, inter, cap = _setup()
        inter.begin_drag(cap.id)
        inter.click_background()
        assert inter.state is InteractionState.DRAGGING

    def test_only_dragged_caption_moves(self):
        session, inter, cap = _setup()
        other = session.add_caption("other")
        inter.begin_drag(cap.id)
        inter.end_drag(50, 20, BOX)
        assert session.captions.get(other.id) == other


class TestDeleteAndSync:
    def test_delete_removes_and_resets(self):
        session, inter, cap = _setup()
        inter.press(cap.id)
        inter.delete(cap.id)
        assert len(session.captions) == 0
        assert inter.state is InteractionState.IDLE

    def test_sync_after_image_replacement(self):
        session, inter, cap = _setup()
        inter.press(cap.id)
        session.replace_image(b"new", "image/png", 10, 10)
        inter.sync()
        assert inter.state is InteractionState.IDLE
        assert inter.caption_id is None

    def test_sync_picks_up_external_selection(self):
        session, inter, cap = _setup()
        session.select_caption(cap.id)
        inter.sync()
        assert inter.state is InteractionState.SELECTED
        assert inter.caption_id == cap.id
