"""Editor session state (pure Python, no Qt dependency).

Owns every mutable piece of the editor: working image, captions, selection,
AI status, suggestions, analysis, edit prompt and the active tool tab.
All mutation goes through methods here; each mutation ends with a single
notification so views never observe a half-applied change.
"""

from __future__ import annotations

from enum import Enum, Flag, auto
from typing import Callable

from src.models.analysis import AnalysisResult
from src.models.caption import Caption, CaptionStore
from src.models.image_store import ImageStore


class AppStatus(Enum):
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    GENERATING_CAPTIONS = "GENERATING_CAPTIONS"
    EDITING_IMAGE = "EDITING_IMAGE"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


BUSY_STATUSES = frozenset(
    {AppStatus.ANALYZING, AppStatus.GENERATING_CAPTIONS, AppStatus.EDITING_IMAGE}
)


class EditorTab(Enum):
    CAPTION = "caption"
    STYLE = "style"
    EDIT = "edit"
    ANALYZE = "analyze"


class SessionChange(Flag):
    NONE = 0
    IMAGE = auto()
    CAPTIONS = auto()
    SELECTION = auto()
    STATUS = auto()
    SUGGESTIONS = auto()
    ANALYSIS = auto()
    PROMPT = auto()
    TAB = auto()


_RESET_CHANGES = (
    SessionChange.IMAGE
    | SessionChange.CAPTIONS
    | SessionChange.SELECTION
    | SessionChange.STATUS
    | SessionChange.SUGGESTIONS
    | SessionChange.ANALYSIS
    | SessionChange.PROMPT
    | SessionChange.TAB
)

SessionListener = Callable[[SessionChange], None]


class EditorSession:
    """Single-owner editing session."""

    def __init__(self) -> None:
        self.image = ImageStore()
        self.captions = CaptionStore()
        self.status: AppStatus = AppStatus.IDLE
        self.suggestions: list[str] = []
        self.analysis: AnalysisResult | None = None
        self.edit_prompt: str = ""
        self.active_tab: EditorTab = EditorTab.CAPTION
        self._listeners: list[SessionListener] = []

    # ---- observers ----

    def subscribe(self, listener: SessionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, changes: SessionChange) -> None:
        if not changes:
            return
        for listener in list(self._listeners):
            listener(changes)

    # ---- derived state ----

    @property
    def has_image(self) -> bool:
        return self.image.has_image

    @property
    def is_busy(self) -> bool:
        return self.status in BUSY_STATUSES

    @property
    def selected_id(self) -> str | None:
        return self.captions.selected_id

    def selected_caption(self) -> Caption | None:
        return self.captions.selected()

    # ---- image ----

    def replace_image(self, data: bytes, mime_type: str, natural_width: int, natural_height: int) -> None:
        """Swap the working image and reset all state derived from the old one."""
        self.image.set(data, mime_type, natural_width, natural_height)
        self._reset_derived_state()
        self._notify(_RESET_CHANGES)

    def _reset_derived_state(self) -> None:
        self.captions.clear()
        self.suggestions = []
        self.analysis = None
        self.edit_prompt = ""
        self.status = AppStatus.IDLE
        self.active_tab = EditorTab.CAPTION

    # ---- captions ----

    def add_caption(self, text: str, displayed_width: float | None = None) -> Caption:
        caption = self.captions.add(text, displayed_width)
        self.active_tab = EditorTab.STYLE
        self._notify(SessionChange.CAPTIONS | SessionChange.SELECTION | SessionChange.TAB)
        return caption

    def update_caption(self, caption_id: str, **fields) -> Caption | None:
        updated = self.captions.update(caption_id, **fields)
        if updated is not None:
            self._notify(SessionChange.CAPTIONS)
        return updated

    def update_selected(self, **fields) -> Caption | None:
        """Apply a style edit to the selected caption (no-op when nothing is selected)."""
        if self.captions.selected_id is None:
            return None
        return self.update_caption(self.captions.selected_id, **fields)

    def move_caption(self, caption_id: str, x: float, y: float) -> Caption | None:
        return self.update_caption(caption_id, x=x, y=y)

    def remove_caption(self, caption_id: str) -> bool:
        was_selected = self.captions.selected_id == caption_id
        if not self.captions.remove(caption_id):
            return False
        changes = SessionChange.CAPTIONS
        if was_selected:
            self.active_tab = EditorTab.CAPTION
            changes |= SessionChange.SELECTION | SessionChange.TAB
        self._notify(changes)
        return True

    def select_caption(self, caption_id: str | None, show_style: bool = False) -> None:
        previous = self.captions.selected_id
        self.captions.select(caption_id)
        changes = SessionChange.NONE
        if self.captions.selected_id != previous:
            changes |= SessionChange.SELECTION
        if show_style and self.captions.selected_id is not None and self.active_tab != EditorTab.STYLE:
            self.active_tab = EditorTab.STYLE
            changes |= SessionChange.TAB
        self._notify(changes)

    # ---- AI state ----

    def set_status(self, status: AppStatus) -> None:
        if status != self.status:
            self.status = status
            self._notify(SessionChange.STATUS)

    def apply_suggestions(self, suggestions: list[str]) -> None:
        """Commit a complete caption suggestion list and mark success."""
        self.suggestions = list(suggestions)
        self.status = AppStatus.SUCCESS
        self.active_tab = EditorTab.CAPTION
        self._notify(SessionChange.SUGGESTIONS | SessionChange.STATUS | SessionChange.TAB)

    def apply_analysis(self, result: AnalysisResult) -> None:
        self.analysis = result
        self.status = AppStatus.SUCCESS
        self.active_tab = EditorTab.ANALYZE
        self._notify(SessionChange.ANALYSIS | SessionChange.STATUS | SessionChange.TAB)

    def clear_analysis(self) -> None:
        if self.analysis is not None:
            self.analysis = None
            self._notify(SessionChange.ANALYSIS)

    def apply_edited_image(self, data: bytes, mime_type: str, natural_width: int, natural_height: int) -> None:
        """Replace the image with an AI edit result; old captions are dropped with it."""
        self.image.set(data, mime_type, natural_width, natural_height)
        self._reset_derived_state()
        self.status = AppStatus.SUCCESS
        self.active_tab = EditorTab.EDIT
        self._notify(_RESET_CHANGES)

    # ---- UI state ----

    def set_edit_prompt(self, prompt: str) -> None:
        if prompt != self.edit_prompt:
            self.edit_prompt = prompt
            self._notify(SessionChange.PROMPT)

    def set_active_tab(self, tab: EditorTab) -> None:
        if tab != self.active_tab:
            self.active_tab = tab
            self._notify(SessionChange.TAB)
