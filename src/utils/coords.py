"""Coordinate space conversions (pure Python, no Qt dependency).

Three spaces are kept apart:

* percentage space — stored on captions, 0-100 on each axis
* display space    — px relative to the on-screen image box
* natural space    — px of the decoded, full-resolution image

Only percentages are ever persisted on a caption.
"""

from __future__ import annotations

from typing import NamedTuple


class ImageBox(NamedTuple):
    """Displayed image rectangle in widget/scene px."""

    left: float
    top: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_percent(value: float) -> float:
    return clamp(value, 0.0, 100.0)


def display_to_percent(pointer_x: float, pointer_y: float, box: ImageBox) -> tuple[float, float]:
    """Pointer position → clamped (x%, y%) of the displayed image box.

    Raises:
        ValueError: box has no area.
    """
    if box.is_empty:
        raise ValueError("Image box has no area")
    x = (pointer_x - box.left) / box.width * 100.0
    y = (pointer_y - box.top) / box.height * 100.0
    return clamp_percent(x), clamp_percent(y)


def percent_to_display(x_pct: float, y_pct: float, box: ImageBox) -> tuple[float, float]:
    """(x%, y%) → point inside the displayed image box."""
    return box.left + box.width * x_pct / 100.0, box.top + box.height * y_pct / 100.0


def percent_to_natural(x_pct: float, y_pct: float, natural_width: int, natural_height: int) -> tuple[float, float]:
    """(x%, y%) → natural pixel position."""
    return x_pct / 100.0 * natural_width, y_pct / 100.0 * natural_height


def fit_box(image_width: float, image_height: float, view_width: float, view_height: float) -> ImageBox:
    """Aspect-preserving fit of an image into a view, centered."""
    if image_width <= 0 or image_height <= 0 or view_width <= 0 or view_height <= 0:
        return ImageBox(0.0, 0.0, 0.0, 0.0)
    scale = min(view_width / image_width, view_height / image_height)
    w = image_width * scale
    h = image_height * scale
    return ImageBox((view_width - w) / 2, (view_height - h) / 2, w, h)
