"""Working image loading from files, template URLs and raw bytes."""

from __future__ import annotations

import io
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from src.utils.config import APP_NAME, APP_VERSION
from src.utils.errors import InputError

logger = logging.getLogger(__name__)

_FORMAT_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "WEBP": "image/webp",
}


@dataclass(frozen=True)
class LoadedImage:
    """Encoded image bytes with their decoded natural size."""

    data: bytes
    mime_type: str
    width: int
    height: int


def load_image_bytes(data: bytes) -> LoadedImage:
    """Validate encoded bytes and read their natural size.

    Raises:
        InputError: bytes are empty or not a decodable image.
    """
    if not data:
        raise InputError("Image data is empty")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
        # verify() 후에는 다시 열어야 크기/포맷 접근이 안전
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            fmt = img.format or ""
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise InputError(f"Unreadable image: {e}") from e
    if width <= 0 or height <= 0:
        raise InputError("Image has no pixels")
    return LoadedImage(data=data, mime_type=_FORMAT_MIME.get(fmt, "image/png"), width=width, height=height)


def load_image_file(path: str | Path) -> LoadedImage:
    """Read and validate an image file.

    Raises:
        InputError: file cannot be read or decoded.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read {path.name}: {e}") from e
    loaded = load_image_bytes(data)
    logger.info(f"Loaded image {path.name} ({loaded.width}x{loaded.height}, {loaded.mime_type})")
    return loaded


def fetch_template(url: str, timeout: float = 30) -> LoadedImage:
    """Download a template image.

    Raises:
        InputError: request failed or the payload is not an image.
    """
    req = urllib.request.Request(url, method="GET")
    req.add_header("User-Agent", f"{APP_NAME}/{APP_VERSION}")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = resp.read()
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise InputError(f"Template fetch failed: {e}") from e
    loaded = load_image_bytes(data)
    logger.info(f"Fetched template {url} ({loaded.width}x{loaded.height})")
    return loaded
