"""CaptionInteraction — 캔버스 포인터 이벤트 → 세션 변경 상태 머신.

MemeCanvasWidget은 히트 테스트와 Qt 이벤트만 담당하고,
선택/드래그/삭제 규칙은 여기서 처리한다 (Qt 의존 없음).
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING

from src.utils.coords import ImageBox, display_to_percent

if TYPE_CHECKING:
    from src.models.session import EditorSession

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = auto()
    SELECTED = auto()
    DRAGGING = auto()


class CaptionInteraction:
    """Idle / Selected(id) / Dragging(id) state machine over an EditorSession."""

    def __init__(self, session: EditorSession) -> None:
        self._session = session
        self.state = InteractionState.IDLE
        self.caption_id: str | None = None

    def press(self, caption_id: str) -> None:
        """Pointer press/click on a caption region."""
        if self.state is InteractionState.DRAGGING:
            return
        if self._session.captions.get(caption_id) is None:
            return
        self._session.select_caption(caption_id, show_style=True)
        self.state = InteractionState.SELECTED
        self.caption_id = caption_id

    def begin_drag(self, caption_id: str) -> None:
        if self.state is InteractionState.DRAGGING:
            return
        if self._session.captions.get(caption_id) is None:
            return
        self.state = InteractionState.DRAGGING
        self.caption_id = caption_id

    def end_drag(self, pointer_x: float, pointer_y: float, box: ImageBox) -> tuple[float, float] | None:
        """Finish a drag at a pointer position given in the same space as *box*.

        Returns the stored (x%, y%), or None when no drag was active or the
        image box has no area.
        """
        if self.state is not InteractionState.DRAGGING or self.caption_id is None:
            return None
        caption_id = self.caption_id
        if box.is_empty:
            logger.warning("Drag dropped: displayed image box is empty")
            self.state = InteractionState.SELECTED
            return None

        x, y = display_to_percent(pointer_x, pointer_y, box)
        self._session.move_caption(caption_id, x, y)
        self._session.select_caption(caption_id, show_style=True)
        self.state = InteractionState.SELECTED
        return x, y

    def click_background(self) -> None:
        # 드래그 중 배경 클릭은 무시 (드래그 종료가 먼저)
        if self.state is InteractionState.DRAGGING:
            return
        self._session.select_caption(None)
        self.state = InteractionState.IDLE
        self.caption_id = None

    def delete(self, caption_id: str) -> None:
        """Delete affordance: removes the caption from any state."""
        self._session.remove_caption(caption_id)
        self.state = InteractionState.IDLE
        self.caption_id = None

    def sync(self) -> None:
        """Reconcile with the session after external mutations (removal, image swap)."""
        if self.caption_id is not None and self._session.captions.get(self.caption_id) is None:
            self.state = InteractionState.IDLE
            self.caption_id = None
            return
        if self.state is InteractionState.DRAGGING:
            return
        selected = self._session.selected_id
        if selected is None:
            self.state = InteractionState.IDLE
            self.caption_id = None
        else:
            self.state = InteractionState.SELECTED
            self.caption_id = selected
