"""CaptionController — 캡션 추가/선택/드래그/스타일/삭제."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.models.session import EditorTab
from src.utils.i18n import tr

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext

logger = logging.getLogger(__name__)


class CaptionController:
    """캔버스 제스처와 툴 패널 입력을 세션 변경으로 옮긴다."""

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx

    # ---- 생성 ----

    def on_caption_chosen(self, text: str) -> None:
        ctx = self.ctx
        text = text.strip()
        if not text or not ctx.session.has_image:
            return
        caption = ctx.session.add_caption(text, ctx.displayed_width())
        ctx.status_bar().showMessage(f"{tr('Caption added')}: {caption.display_text[:30]}", 3000)

    # ---- 캔버스 제스처 ----

    def on_caption_pressed(self, caption_id: str) -> None:
        self.ctx.interaction.press(caption_id)

    def on_caption_drag_started(self, caption_id: str) -> None:
        self.ctx.interaction.begin_drag(caption_id)

    def on_caption_dropped(self, caption_id: str, scene_x: float, scene_y: float) -> None:
        ctx = self.ctx
        result = ctx.interaction.end_drag(scene_x, scene_y, ctx.canvas.image_box())
        if result is not None:
            logger.debug(f"Caption {caption_id} moved to ({result[0]:.1f}%, {result[1]:.1f}%)")

    def on_background_clicked(self) -> None:
        self.ctx.interaction.click_background()

    def on_caption_delete_clicked(self, caption_id: str) -> None:
        self.ctx.interaction.delete(caption_id)
        self.ctx.status_bar().showMessage(tr("Caption deleted"), 3000)

    # ---- 스타일 탭 ----

    def on_style_edited(self, fields: dict) -> None:
        try:
            self.ctx.session.update_selected(**fields)
        except ValueError as e:
            logger.warning(f"Ignored style edit {fields}: {e}")

    def on_delete_selected(self) -> None:
        caption_id = self.ctx.session.selected_id
        if caption_id is not None:
            self.on_caption_delete_clicked(caption_id)

    # ---- 탭/프롬프트 ----

    def on_tab_selected(self, tab: EditorTab) -> None:
        self.ctx.session.set_active_tab(tab)

    def on_edit_prompt_changed(self, text: str) -> None:
        self.ctx.session.set_edit_prompt(text)

    def on_analysis_dismissed(self) -> None:
        self.ctx.session.clear_analysis()
