"""Tests for the flattened meme export (Pillow, no Qt)."""

import io
import re

import numpy as np
import pytest
from PIL import Image, features

from src.models.caption import Caption
from src.services.meme_compositor import (
    build_export_filename,
    compose_meme,
    decode_image,
    encode_png,
    export_meme,
    export_scale,
    outline_radius,
    scaled_metrics,
)
from src.utils.errors import ExportError


def _png_bytes(width: int = 400, height: int = 300, color=(255, 255, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def _pixels(image: Image.Image) -> np.ndarray:
    return np.asarray(image.convert("RGBA"))


class TestScaling:
    def test_export_scale(self):
        assert export_scale(1600, 800) == 2.0

    def test_doubling_display_width_halves_scale(self):
        cap = Caption(text="x", font_size=40, stroke_width=5)
        font_a, stroke_a = scaled_metrics(cap, export_scale(1600, 400))
        font_b, stroke_b = scaled_metrics(cap, export_scale(1600, 800))
        assert font_a == 160 and stroke_a == 20
        assert font_b == font_a / 2
        assert stroke_b == stroke_a / 2

    def test_invalid_display_width(self):
        with pytest.raises(ExportError):
            export_scale(1600, 0)

    def test_outline_radius_never_drops_thin_strokes(self):
        assert outline_radius(0) == 0
        assert outline_radius(0.4) == 1
        assert outline_radius(1) == 1
        assert outline_radius(3) == 2
        assert outline_radius(4) == 2
        assert outline_radius(5) == 3

    @pytest.mark.skipif(not features.check("freetype2"), reason="needs FreeType fonts")
    def test_rendered_glyph_height_follows_display_width(self):
        src = _png_bytes(800, 400, (0, 0, 0))
        cap = Caption(text="HELLO", x=50, y=50, color="#ffffff", font_size=40, stroke_width=0)

        def glyph_height(display_width):
            out = _pixels(compose_meme(src, [cap], display_width=display_width))
            ys, _ = np.nonzero(out[:, :, 0] > 128)
            return ys.max() - ys.min() + 1

        small = glyph_height(800)
        large = glyph_height(400)
        assert large / small == pytest.approx(2.0, rel=0.1)


class TestFilename:
    def test_format(self):
        assert build_export_filename(1700000000123) == "memegenius-1700000000123.png"

    def test_default_uses_current_time(self):
        assert re.fullmatch(r"memegenius-\d{13}\.png", build_export_filename())


class TestCompose:
    def test_output_has_natural_size(self):
        out = compose_meme(_png_bytes(640, 480), [Caption(text="hello")], display_width=320)
        assert out.size == (640, 480)

    def test_no_captions_matches_source(self):
        src = _png_bytes(200, 100, (10, 120, 200))
        out = compose_meme(src, [], display_width=200)
        assert np.array_equal(_pixels(out), _pixels(decode_image(src)))

    def test_caption_changes_pixels(self):
        src = _png_bytes(400, 300)
        out = compose_meme(src, [Caption(text="MEME", color="#ff0000", x=50, y=50, font_size=40)], 400)
        assert not np.array_equal(_pixels(out), _pixels(decode_image(src)))

    def test_deterministic(self):
        src = _png_bytes(400, 300, (30, 30, 30))
        captions = [
            Caption(text="top text", y=15, font_size=36, stroke_width=4),
            Caption(text="bottom text", y=85, font_size=36, stroke_width=4, color="#ffff00"),
        ]
        first = compose_meme(src, captions, display_width=250)
        second = compose_meme(src, captions, display_width=250)
        assert np.array_equal(_pixels(first), _pixels(second))
        assert encode_png(first) == encode_png(second)

    def test_caption_centered_on_percentage_position(self):
        src = _png_bytes(800, 600)
        cap = Caption(text="H", x=25, y=25, color="#000000", font_size=30, stroke_width=0)
        out = _pixels(compose_meme(src, [cap], display_width=400))
        ys, xs = np.nonzero(out[:, :, 0] < 128)
        assert len(xs) > 0
        assert abs(xs.mean() - 200) < 40
        assert abs(ys.mean() - 150) < 40

    def test_one_pixel_outline_is_drawn(self):
        src = _png_bytes(400, 300)
        cap = Caption(
            text="HELLO", x=50, y=50, color="#ffffff",
            stroke_color="#000000", font_size=40, stroke_width=1,
        )
        out = _pixels(compose_meme(src, [cap], display_width=400))
        assert np.count_nonzero(out[:, :, 0] < 128) > 0

    def test_source_bytes_not_modified(self):
        src = _png_bytes(100, 100)
        copy = bytes(src)
        compose_meme(src, [Caption(text="x")], display_width=100)
        assert src == copy

    def test_bad_image_bytes(self):
        with pytest.raises(ExportError):
            compose_meme(b"not an image", [], display_width=100)

    def test_empty_image_bytes(self):
        with pytest.raises(ExportError):
            compose_meme(b"", [], display_width=100)

    def test_bad_color(self):
        with pytest.raises(ExportError):
            compose_meme(_png_bytes(), [Caption(text="x", color="not-a-color")], display_width=400)


class TestExportMeme:
    def test_writes_timestamped_png(self, tmp_path):
        path = export_meme(_png_bytes(), [Caption(text="hi")], 400, tmp_path, timestamp_ms=1234567890123)
        assert path == tmp_path / "memegenius-1234567890123.png"
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (400, 300)

    def test_creates_output_dir(self, tmp_path):
        out_dir = tmp_path / "nested" / "dir"
        path = export_meme(_png_bytes(), [], 400, out_dir, timestamp_ms=1)
        assert path.parent == out_dir
        assert path.exists()

    def test_failure_leaves_no_file(self, tmp_path):
        with pytest.raises(ExportError):
            export_meme(b"garbage", [], 400, tmp_path, timestamp_ms=1)
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_dir(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        with pytest.raises(ExportError):
            export_meme(_png_bytes(), [], 400, blocker, timestamp_ms=1)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["file.txt"]
