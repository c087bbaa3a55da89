"""Working image holder (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ImageStore:
    """The single working image as encoded bytes plus its natural size.

    Captions are never burned into ``data``.
    """

    data: bytes | None = None
    mime_type: str = "image/png"
    natural_width: int = 0
    natural_height: int = 0

    @property
    def has_image(self) -> bool:
        return bool(self.data)

    def set(self, data: bytes, mime_type: str, natural_width: int, natural_height: int) -> None:
        self.data = data
        self.mime_type = mime_type
        self.natural_width = natural_width
        self.natural_height = natural_height

    def clear(self) -> None:
        self.data = None
        self.mime_type = "image/png"
        self.natural_width = 0
        self.natural_height = 0
