"""Flattened meme export: base image + captions rendered at natural resolution.

``compose_meme`` is a pure function of (image bytes, captions, display width);
it never touches Qt, so the preview widget's current size only enters through
the ``display_width`` argument.
"""

from __future__ import annotations

import io
import logging
import math
import os
import time
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from src.models.caption import Caption
from src.utils.config import CAPTION_FONT_CANDIDATES, EXPORT_EXTENSION, EXPORT_PREFIX
from src.utils.coords import percent_to_natural
from src.utils.errors import ExportError

logger = logging.getLogger(__name__)


def export_scale(natural_width: int, display_width: float) -> float:
    """Display px → natural px factor.

    Raises:
        ExportError: display width is not positive.
    """
    if display_width is None or display_width <= 0:
        raise ExportError(f"Invalid display width: {display_width}")
    return natural_width / display_width


def scaled_metrics(caption: Caption, scale: float) -> tuple[float, float]:
    """Return (font_px, stroke_px) of *caption* in natural space."""
    return caption.font_size * scale, caption.stroke_width * scale


def outline_radius(stroke_px: float) -> int:
    """Pillow stroke radius for a natural-space outline width.

    Half the width lies outside the glyph. Pillow only takes whole pixels,
    so round up; any visible width keeps at least 1px.
    """
    if stroke_px <= 0:
        return 0
    return max(1, math.ceil(stroke_px / 2))


def build_export_filename(timestamp_ms: int | None = None) -> str:
    """``memegenius-<unix-ms>.png``"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{EXPORT_PREFIX}-{timestamp_ms}{EXPORT_EXTENSION}"


def find_caption_font(font_path: str | None = None) -> str | None:
    """Return the first usable font file: explicit path, then known Impact-like fonts."""
    candidates = [font_path] if font_path else []
    candidates.extend(CAPTION_FONT_CANDIDATES)
    for candidate in candidates:
        if candidate and Path(candidate).is_file():
            return candidate
    return None


@lru_cache(maxsize=64)
def _load_font(font_file: str | None, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_file:
        try:
            return ImageFont.truetype(font_file, size)
        except OSError:
            logger.warning(f"Could not load font {font_file}, using Pillow default")
    return ImageFont.load_default(size=size)


def decode_image(image_bytes: bytes) -> Image.Image:
    """Decode encoded bytes into a fully loaded RGBA image.

    Raises:
        ExportError: bytes are empty or not a decodable image.
    """
    if not image_bytes:
        raise ExportError("No working image to export")
    try:
        with Image.open(io.BytesIO(image_bytes)) as src:
            src.load()
            image = src.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ExportError(f"Failed to decode working image: {e}") from e
    if image.width <= 0 or image.height <= 0:
        raise ExportError("Working image has no pixels")
    return image


def _draw_caption(
    draw: ImageDraw.ImageDraw,
    caption: Caption,
    natural_size: tuple[int, int],
    scale: float,
    font_file: str | None,
) -> None:
    px, py = percent_to_natural(caption.x, caption.y, natural_size[0], natural_size[1])
    font_px, stroke_px = scaled_metrics(caption, scale)
    # 글리프는 실수 px 그대로 (n/d 배율 유지)
    font = _load_font(font_file, max(1.0, font_px))
    text = caption.display_text

    stroke_radius = outline_radius(stroke_px)
    if stroke_radius > 0:
        draw.text(
            (px, py), text, font=font, anchor="mm",
            fill=caption.stroke_color,
            stroke_width=stroke_radius, stroke_fill=caption.stroke_color,
        )
    draw.text((px, py), text, font=font, anchor="mm", fill=caption.color)


def compose_meme(
    image_bytes: bytes,
    captions: Iterable[Caption],
    display_width: float,
    font_path: str | None = None,
) -> Image.Image:
    """Render captions over the working image at its natural resolution.

    Captions are drawn in collection order, stroke pass before fill pass,
    centered on their percentage position.

    Raises:
        ExportError: image cannot be decoded, display width is invalid
            or a caption color cannot be parsed.
    """
    base = decode_image(image_bytes)
    scale = export_scale(base.width, display_width)

    surface = Image.new("RGBA", base.size)
    surface.paste(base, (0, 0))
    draw = ImageDraw.Draw(surface)
    font_file = find_caption_font(font_path)

    for caption in captions:
        try:
            _draw_caption(draw, caption, base.size, scale, font_file)
        except ValueError as e:
            raise ExportError(f"Cannot render caption {caption.id}: {e}") from e
    return surface


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def export_meme(
    image_bytes: bytes,
    captions: Iterable[Caption],
    display_width: float,
    output_dir: Path,
    font_path: str | None = None,
    timestamp_ms: int | None = None,
) -> Path:
    """Compose, encode and write the meme to ``output_dir``.

    The file is encoded in memory and renamed into place, so a failure
    never leaves a partial file behind.

    Raises:
        ExportError: composition or writing failed.
    """
    image = compose_meme(image_bytes, captions, display_width, font_path)
    data = encode_png(image)

    output_dir = Path(output_dir)
    out_path = output_dir / build_export_filename(timestamp_ms)
    tmp_path = out_path.with_suffix(out_path.suffix + ".part")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(data)
        os.replace(tmp_path, out_path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise ExportError(f"Failed to write {out_path}: {e}") from e

    logger.info(f"Exported meme {out_path} ({image.width}x{image.height})")
    return out_path
