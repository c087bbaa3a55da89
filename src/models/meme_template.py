"""Meme template data model (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass

from src.utils.config import TEMPLATES


@dataclass
class MemeTemplate:
    """A remote base image offered in the template picker."""

    template_id: str
    name: str
    url: str

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MemeTemplate:
        return cls(
            template_id=data["template_id"],
            name=data.get("name", ""),
            url=data["url"],
        )


def builtin_templates() -> list[MemeTemplate]:
    """Return the built-in trending template catalog."""
    return [MemeTemplate(template_id=t_id, name=name, url=url) for t_id, name, url in TEMPLATES]
