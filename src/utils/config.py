"""Application configuration constants."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "MemeGenius"
APP_VERSION = "0.3.0"
ORG_NAME = "MemeGenius"

# Caption defaults (display-space px)
CAPTION_DEFAULT_X = 50.0
CAPTION_FIRST_Y = 15.0   # 첫 캡션은 상단
CAPTION_NEXT_Y = 85.0    # 이후 캡션은 하단
CAPTION_DEFAULT_COLOR = "#ffffff"
CAPTION_DEFAULT_STROKE_COLOR = "#000000"
CAPTION_MIN_DEFAULT_FONT_SIZE = 24.0
CAPTION_FALLBACK_FONT_SIZE = 40.0  # displayed width unknown
CAPTION_FONT_WIDTH_DIVISOR = 10.0
CAPTION_STROKE_DIVISOR = 8.0

# Styling control ranges
FONT_SIZE_MIN = 10
FONT_SIZE_MAX = 120
STROKE_WIDTH_MIN = 0
STROKE_WIDTH_MAX = 20

# Caption font (Impact-like). First existing path wins; None → Pillow default.
CAPTION_FONT_FAMILY = "Impact"
CAPTION_FONT_CANDIDATES = [
    "/System/Library/Fonts/Supplemental/Impact.ttf",
    r"C:\Windows\Fonts\impact.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/Impact.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
]

# Export
EXPORT_PREFIX = "memegenius"
EXPORT_EXTENSION = ".png"
EXPORT_DEFAULT_DIR = Path.home() / "Pictures"

# Gemini
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
GEMINI_TEXT_MODEL = "gemini-3-pro-preview"
GEMINI_IMAGE_MODEL = "gemini-2.5-flash-image"
GEMINI_DEFAULT_TIMEOUT = 60  # seconds

# Supported image formats
IMAGE_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"]
IMAGE_FILTER = "Image Files ({});;All Files (*)".format(
    " ".join(f"*{ext}" for ext in IMAGE_EXTENSIONS)
)

# Trending templates: (template_id, name, url)
TEMPLATES = [
    ("1", "Distracted Boyfriend", "https://picsum.photos/id/10/800/600"),
    ("2", "Two Buttons", "https://picsum.photos/id/20/800/600"),
    ("3", "Drake Hotline", "https://picsum.photos/id/30/800/600"),
    ("4", "Change My Mind", "https://picsum.photos/id/40/800/600"),
]

# UI
CANVAS_MIN_WIDTH = 480
CANVAS_MIN_HEIGHT = 360
TOOL_PANEL_WIDTH = 340
