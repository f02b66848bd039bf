"""
Tests for image I/O in art_split_merger.

Covers:
- Input file validation and lazy loading
- Output format selection
- Encoding and saving
"""

import io
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

import art_split_merger.image_io as asm_image_io
from art_split_merger.errors import EncodeFailure, InputNotFound


class TestImageLoading:
    """Test image validation and lazy opening."""

    def test_open_image_valid(
        self, make_image_file: Callable[..., Path],
    ) -> None:
        path = make_image_file("ok.png", (30, 20))
        with asm_image_io.open_image(path) as img:
            assert img.size == (30, 20)

    def test_open_image_missing(self) -> None:
        """A missing path raises InputNotFound, a FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            asm_image_io.open_image("nonexistent_image.png")
        with pytest.raises(InputNotFound):
            asm_image_io.open_image("nonexistent_image.png")

    def test_open_image_invalid_data(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image data")
        with pytest.raises(OSError, match="Error loading image"):
            asm_image_io.open_image(bad)

    def test_open_image_too_large(
        self,
        make_image_file: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(asm_image_io, "MAX_DIMENSION", 50)
        path = make_image_file("wide.png", (51, 10))
        with pytest.raises(ValueError, match="too large"):
            asm_image_io.open_image(path)

    def test_large_image_warns_but_opens(
        self,
        make_image_file: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(asm_image_io, "LARGE_IMAGE_DIMENSION", 40)
        path = make_image_file("big.png", (41, 10))
        with caplog.at_level(logging.WARNING):
            with asm_image_io.open_image(path) as img:
                assert img.size == (41, 10)
        assert "Image is large: 41x10" in caplog.text


class TestValidateImageFile:
    def test_accepts_supported_extension(
        self,
        make_image_file: Callable[..., Path],
    ) -> None:
        asm_image_io.validate_image_file(make_image_file("a.JPG"))

    def test_rejects_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "a.gif"
        Image.new("RGB", (4, 4)).save(path)
        with pytest.raises(ValueError, match="Unsupported format"):
            asm_image_io.validate_image_file(path)

    def test_rejects_large_file(
        self,
        make_image_file: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(asm_image_io, "MAX_FILE_SIZE", 10)
        with pytest.raises(ValueError, match="too large"):
            asm_image_io.validate_image_file(make_image_file("big.png"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputNotFound):
            asm_image_io.validate_image_file(tmp_path / "gone.png")


class TestOutputFormat:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("out.jpg", "jpeg"),
            ("out.JPEG", "jpeg"),
            ("out.webp", "webp"),
            ("out.png", "png"),
            ("out.tiff", "png"),
            ("out", "png"),
        ],
    )
    def test_format_from_extension(self, path: str, expected: str) -> None:
        assert asm_image_io.resolve_output_format(path) == expected

    def test_explicit_request_wins(self) -> None:
        assert asm_image_io.resolve_output_format("x.png", "jpg") == "jpeg"

    def test_extension_for(self) -> None:
        assert asm_image_io.extension_for("jpeg") == ".jpg"
        assert asm_image_io.extension_for("webp") == ".webp"


class TestEncode:
    @pytest.mark.parametrize(
        ("fmt", "pil_format"),
        [("png", "PNG"), ("jpeg", "JPEG"), ("webp", "WEBP")],
    )
    def test_round_trip_format(
        self,
        sample_image: Image.Image,
        fmt: str,
        pil_format: str,
    ) -> None:
        data = asm_image_io.encode_image(sample_image, fmt, 92)
        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.format == pil_format
            assert decoded.size == sample_image.size

    def test_png_is_lossless(self, sample_image: Image.Image) -> None:
        data = asm_image_io.encode_image(sample_image, "png", 1)
        with Image.open(io.BytesIO(data)) as decoded:
            assert decoded.getpixel((0, 0)) == (255, 0, 0)

    def test_quality_changes_jpeg_size(self) -> None:
        img = Image.effect_noise((64, 64), 50).convert("RGB")
        low = asm_image_io.encode_image(img, "jpeg", 10)
        high = asm_image_io.encode_image(img, "jpeg", 95)
        assert len(low) < len(high)

    @pytest.mark.parametrize("quality", [0, 101])
    def test_quality_out_of_range(
        self,
        sample_image: Image.Image,
        quality: int,
    ) -> None:
        with pytest.raises(ValueError, match="Quality"):
            asm_image_io.encode_image(sample_image, "jpeg", quality)

    def test_encoder_error_wrapped(self, sample_image: Image.Image) -> None:
        cmyk = sample_image.convert("CMYK")
        with pytest.raises(EncodeFailure):
            asm_image_io.encode_image(cmyk, "png", 92)

    def test_save_encoded_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "out.png"
        assert asm_image_io.save_encoded(b"data", target) == target
        assert target.read_bytes() == b"data"
