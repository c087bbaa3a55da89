"""Image analysis result model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AnalysisResult:
    """Description, mood and keywords returned by the AI gateway."""

    description: str
    mood: str
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "mood": self.mood,
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: dict) -> AnalysisResult:
        """Build from a gateway payload. All three fields are required.

        Raises:
            KeyError: a required field is missing.
            TypeError: a field has the wrong type.
        """
        description = data["description"]
        mood = data["mood"]
        keywords = data["keywords"]
        if not isinstance(description, str) or not isinstance(mood, str):
            raise TypeError("description and mood must be strings")
        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            raise TypeError("keywords must be a list of strings")
        return cls(description=description, mood=mood, keywords=list(keywords))
