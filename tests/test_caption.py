"""Tests for Caption / CaptionStore models."""

import pytest

from src.models.caption import Caption, CaptionStore, default_font_size
from src.utils.config import FONT_SIZE_MAX, FONT_SIZE_MIN, STROKE_WIDTH_MAX


class TestDefaultFontSize:
    def test_unknown_width_uses_fallback(self):
        assert default_font_size(None) == 40
        assert default_font_size(0) == 40

    def test_small_image_uses_minimum(self):
        assert default_font_size(100) == 24

    def test_scales_with_width(self):
        assert default_font_size(600) == 60


class TestCaption:
    def test_display_text_is_upper_case(self):
        assert Caption(text="when the code works").display_text == "WHEN THE CODE WORKS"

    def test_to_dict_and_back(self):
        cap = Caption(text="hi", x=10, y=20, color="#ff0000", font_size=30,
                      stroke_color="#00ff00", stroke_width=2)
        restored = Caption.from_dict(cap.to_dict())
        assert restored == cap

    def test_from_dict_clamps_position(self):
        cap = Caption.from_dict({"text": "x", "x": -20, "y": 150})
        assert cap.x == 0
        assert cap.y == 100

    def test_from_dict_generates_id_when_missing(self):
        cap = Caption.from_dict({"text": "x"})
        assert cap.id


class TestCaptionStoreAdd:
    def test_first_caption_at_top(self):
        store = CaptionStore()
        cap = store.add("top")
        assert cap.x == 50
        assert cap.y == 15

    def test_later_captions_at_bottom(self):
        store = CaptionStore()
        store.add("top")
        second = store.add("bottom")
        third = store.add("another")
        assert second.y == 85
        assert third.y == 85

    def test_add_selects_new_caption(self):
        store = CaptionStore()
        store.add("a")
        cap = store.add("b")
        assert store.selected_id == cap.id

    def test_default_style(self):
        store = CaptionStore()
        cap = store.add("a", displayed_width=800)
        assert cap.font_size == 80
        assert cap.stroke_width == 10
        assert cap.color == "#ffffff"
        assert cap.stroke_color == "#000000"

    def test_ids_are_unique(self):
        store = CaptionStore()
        for i in range(200):
            store.add(f"caption {i}")
        assert len(set(store.ids())) == 200

    def test_order_is_creation_order(self):
        store = CaptionStore()
        a = store.add("a")
        b = store.add("b")
        assert [c.id for c in store] == [a.id, b.id]
        assert store[1] is b


class TestCaptionStoreUpdate:
    def test_update_font_size_only_changes_font_size(self):
        store = CaptionStore()
        cap = store.add("a")
        before = cap.to_dict()
        updated = store.update(cap.id, font_size=55)
        after = updated.to_dict()
        assert after.pop("font_size") == 55
        before.pop("font_size")
        assert after == before

    def test_update_leaves_other_captions_untouched(self):
        store = CaptionStore()
        a = store.add("a")
        b = store.add("b")
        store.update(a.id, color="#123456")
        assert store.get(b.id) == b

    def test_update_clamps_ranges(self):
        store = CaptionStore()
        cap = store.add("a")
        updated = store.update(cap.id, x=130, y=-4, font_size=999, stroke_width=50)
        assert updated.x == 100
        assert updated.y == 0
        assert updated.font_size == FONT_SIZE_MAX
        assert updated.stroke_width == STROKE_WIDTH_MAX
        assert store.update(cap.id, font_size=1).font_size == FONT_SIZE_MIN

    def test_update_missing_id_is_noop(self):
        store = CaptionStore()
        store.add("a")
        assert store.update("missing", text="b") is None
        assert store[0].text == "a"

    def test_update_id_rejected(self):
        store = CaptionStore()
        cap = store.add("a")
        with pytest.raises(ValueError):
            store.update(cap.id, id="other")

    def test_update_unknown_field_rejected(self):
        store = CaptionStore()
        cap = store.add("a")
        with pytest.raises(ValueError, match="Unknown"):
            store.update(cap.id, rotation=45)


class TestCaptionStoreRemoveSelect:
    def test_remove_selected_clears_selection(self):
        store = CaptionStore()
        cap = store.add("a")
        assert store.remove(cap.id) is True
        assert store.selected_id is None
        assert len(store) == 0

    def test_remove_other_keeps_selection(self):
        store = CaptionStore()
        a = store.add("a")
        b = store.add("b")
        store.remove(a.id)
        assert store.selected_id == b.id

    def test_remove_missing_returns_false(self):
        store = CaptionStore()
        store.add("a")
        assert store.remove("missing") is False
        assert len(store) == 1

    def test_select_unknown_deselects(self):
        store = CaptionStore()
        store.add("a")
        store.select("missing")
        assert store.selected_id is None
        assert store.selected() is None

    def test_clear(self):
        store = CaptionStore()
        store.add("a")
        store.add("b")
        store.clear()
        assert len(store) == 0
        assert store.selected_id is None
