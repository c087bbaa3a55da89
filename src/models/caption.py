"""Caption data models (pure Python, no Qt dependency)."""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field

from src.utils.config import (
    CAPTION_DEFAULT_COLOR,
    CAPTION_DEFAULT_STROKE_COLOR,
    CAPTION_DEFAULT_X,
    CAPTION_FALLBACK_FONT_SIZE,
    CAPTION_FIRST_Y,
    CAPTION_FONT_WIDTH_DIVISOR,
    CAPTION_MIN_DEFAULT_FONT_SIZE,
    CAPTION_NEXT_Y,
    CAPTION_STROKE_DIVISOR,
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    STROKE_WIDTH_MAX,
    STROKE_WIDTH_MIN,
)
from src.utils.coords import clamp, clamp_percent


def default_font_size(displayed_width: float | None) -> float:
    """Font size for a new caption, derived from the displayed image width."""
    if not displayed_width or displayed_width <= 0:
        return CAPTION_FALLBACK_FONT_SIZE
    return max(CAPTION_MIN_DEFAULT_FONT_SIZE, displayed_width / CAPTION_FONT_WIDTH_DIVISOR)


def clamp_font_size(value: float) -> float:
    return clamp(float(value), FONT_SIZE_MIN, FONT_SIZE_MAX)


def clamp_stroke_width(value: float) -> float:
    return clamp(float(value), STROKE_WIDTH_MIN, STROKE_WIDTH_MAX)


def _new_caption_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True)
class Caption:
    """A single text overlay positioned in percentage space."""

    text: str
    x: float = CAPTION_DEFAULT_X   # % of displayed image width (0-100)
    y: float = CAPTION_FIRST_Y     # % of displayed image height (0-100)
    color: str = CAPTION_DEFAULT_COLOR
    font_size: float = CAPTION_FALLBACK_FONT_SIZE  # display-space px
    stroke_color: str = CAPTION_DEFAULT_STROKE_COLOR
    stroke_width: float = CAPTION_FALLBACK_FONT_SIZE / CAPTION_STROKE_DIVISOR
    id: str = field(default_factory=_new_caption_id)

    @property
    def display_text(self) -> str:
        """Text as drawn (preview and export force upper case)."""
        return self.text.upper()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "color": self.color,
            "font_size": self.font_size,
            "stroke_color": self.stroke_color,
            "stroke_width": self.stroke_width,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Caption:
        kwargs = dict(
            text=data["text"],
            x=clamp_percent(data.get("x", CAPTION_DEFAULT_X)),
            y=clamp_percent(data.get("y", CAPTION_FIRST_Y)),
            color=data.get("color", CAPTION_DEFAULT_COLOR),
            font_size=data.get("font_size", CAPTION_FALLBACK_FONT_SIZE),
            stroke_color=data.get("stroke_color", CAPTION_DEFAULT_STROKE_COLOR),
            stroke_width=data.get("stroke_width", CAPTION_FALLBACK_FONT_SIZE / CAPTION_STROKE_DIVISOR),
        )
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)


# update()로 변경 가능한 필드 (id 제외)
_EDITABLE_FIELDS = frozenset(
    {"text", "x", "y", "color", "font_size", "stroke_color", "stroke_width"}
)


@dataclass(slots=True)
class CaptionStore:
    """Ordered caption collection with a single optional selection.

    Iteration order is creation order; later captions render on top.
    """

    captions: list[Caption] = field(default_factory=list)
    selected_id: str | None = None

    def add(self, text: str, displayed_width: float | None = None) -> Caption:
        """Create a caption at its default position, append it and select it."""
        font_size = default_font_size(displayed_width)
        caption = Caption(
            text=text,
            x=CAPTION_DEFAULT_X,
            y=CAPTION_FIRST_Y if not self.captions else CAPTION_NEXT_Y,
            font_size=font_size,
            stroke_width=font_size / CAPTION_STROKE_DIVISOR,
        )
        existing = self.ids()
        while caption.id in existing:
            caption.id = _new_caption_id()
        self.captions.append(caption)
        self.selected_id = caption.id
        return caption

    def update(self, caption_id: str, **fields) -> Caption | None:
        """Replace the named fields of one caption; no-op when *caption_id* is absent.

        Raises:
            ValueError: ``id`` or an unknown field name was given.
        """
        if "id" in fields:
            raise ValueError("Caption id cannot be changed")
        unknown = set(fields) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown caption field(s): {', '.join(sorted(unknown))}")

        index = self.index_of(caption_id)
        if index < 0:
            return None

        if "x" in fields:
            fields["x"] = clamp_percent(fields["x"])
        if "y" in fields:
            fields["y"] = clamp_percent(fields["y"])
        if "font_size" in fields:
            fields["font_size"] = clamp_font_size(fields["font_size"])
        if "stroke_width" in fields:
            fields["stroke_width"] = clamp_stroke_width(fields["stroke_width"])

        updated = dataclasses.replace(self.captions[index], **fields)
        self.captions[index] = updated
        return updated

    def remove(self, caption_id: str) -> bool:
        """Remove one caption. Clears selection if it was selected."""
        index = self.index_of(caption_id)
        if index < 0:
            return False
        self.captions.pop(index)
        if self.selected_id == caption_id:
            self.selected_id = None
        return True

    def clear(self) -> None:
        self.captions.clear()
        self.selected_id = None

    def select(self, caption_id: str | None) -> None:
        """Select a caption by id (or None to deselect). Unknown ids deselect."""
        if caption_id is not None and self.index_of(caption_id) < 0:
            caption_id = None
        self.selected_id = caption_id

    def selected(self) -> Caption | None:
        if self.selected_id is None:
            return None
        return self.get(self.selected_id)

    def get(self, caption_id: str) -> Caption | None:
        index = self.index_of(caption_id)
        return self.captions[index] if index >= 0 else None

    def index_of(self, caption_id: str) -> int:
        for i, caption in enumerate(self.captions):
            if caption.id == caption_id:
                return i
        return -1

    def ids(self) -> list[str]:
        return [c.id for c in self.captions]

    def __len__(self) -> int:
        return len(self.captions)

    def __iter__(self):
        return iter(self.captions)

    def __getitem__(self, index: int) -> Caption:
        return self.captions[index]
