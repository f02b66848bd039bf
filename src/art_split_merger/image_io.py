"""Image decoding, input validation, and output encoding."""
from __future__ import annotations

import io
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, UnidentifiedImageError

from art_split_merger.constants import (
    LARGE_IMAGE_DIMENSION,
    MAX_DIMENSION,
    MAX_FILE_SIZE,
    QUALITY_MAX,
    QUALITY_MIN,
    VALID_EXTENSIONS,
)
from art_split_merger.errors import EncodeFailure, InputNotFound
from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from art_split_merger.type_defs import OutputFormat

_PIL_FORMATS: dict[str, str] = {
    "png": "PNG",
    "jpeg": "JPEG",
    "webp": "WEBP",
}
_EXTENSIONS: dict[str, str] = {
    "png": ".png",
    "jpeg": ".jpg",
    "webp": ".webp",
}


def validate_image_file(path: str | Path) -> None:
    """
    Reject files the decoder should never be asked to open.

    Only PNG, JPEG and WebP files up to 100 MB are accepted.

    Raises:
        InputNotFound: If the file does not exist
        ValueError: If the extension or the file size is unsupported

    """
    file_path = Path(path)
    if not file_path.is_file():
        msg = f"Image file not found: '{path}'"
        raise InputNotFound(msg)
    suffix = file_path.suffix.lower()
    if suffix not in VALID_EXTENSIONS:
        msg = f"Unsupported format '{suffix}'. Use PNG, JPG, or WEBP."
        raise ValueError(msg)
    size = file_path.stat().st_size
    if size > MAX_FILE_SIZE:
        msg = (
            f"File is too large ({size / (1024 * 1024):.1f} MB). "
            "Maximum is 100 MB."
        )
        raise ValueError(msg)


def open_image(path: str | Path) -> Image.Image:
    """
    Open an image lazily; only the header is read until pixels are used.

    Args:
        path: Path to the image file

    Returns:
        PIL Image whose size is known but whose pixels are not yet decoded

    Raises:
        InputNotFound: If the image file does not exist
        OSError: If the file is not a readable image

    """
    try:
        img = Image.open(path)
    except FileNotFoundError as e:
        msg = f"Image file not found: '{path}'"
        raise InputNotFound(msg) from e
    except (UnidentifiedImageError, OSError) as e:
        msg = f"Error loading image '{path}': {e!s}"
        raise OSError(msg) from e
    try:
        validate_image_dimensions(img)
    except ValueError:
        img.close()
        raise
    return img


def validate_image_dimensions(img: Image.Image) -> None:
    """Ensure image dimensions are positive and within the safety limit."""
    if img.width <= 0 or img.height <= 0:
        msg = "Invalid image dimensions."
        raise ValueError(msg)
    if img.width > MAX_DIMENSION or img.height > MAX_DIMENSION:
        msg = (f"Image too large ({img.width}x{img.height}). "
               f"Max {MAX_DIMENSION}px per side."
               )
        raise ValueError(msg)
    if max(img.width, img.height) > LARGE_IMAGE_DIMENSION:
        logger.warning(
            "Image is large: %dx%d. This may slow processing.",
            img.width,
            img.height,
        )


def resolve_output_format(
    path: str | Path | None = None,
    requested: str | None = None,
) -> OutputFormat:
    """
    Pick the output format from an explicit request or a file extension.

    ``.jpg``/``.jpeg`` map to JPEG and ``.webp`` to WebP; anything else,
    including a missing path, falls back to PNG.
    """
    name = (requested or "").lower()
    if not name and path is not None:
        name = Path(path).suffix.lower().lstrip(".")
    if name in ("jpg", "jpeg"):
        return "jpeg"
    if name == "webp":
        return "webp"
    return "png"


def extension_for(fmt: OutputFormat) -> str:
    """Return the canonical file extension for ``fmt``."""
    return _EXTENSIONS[fmt]


def encode_image(
    img: Image.Image,
    fmt: OutputFormat,
    quality: int,
) -> bytes:
    """
    Serialize ``img`` to PNG, JPEG or WebP bytes.

    PNG is lossless and ignores ``quality``; JPEG and WebP use it as-is.

    Raises:
        ValueError: If quality is out of range
        EncodeFailure: If the encoder fails or produces no bytes

    """
    if not QUALITY_MIN <= quality <= QUALITY_MAX:
        msg = f"Quality must be between 1 and 100, got {quality}"
        raise ValueError(msg)
    params: dict[str, int] = {}
    if fmt in ("jpeg", "webp"):
        params["quality"] = quality

    buffer = io.BytesIO()
    try:
        img.save(buffer, format=_PIL_FORMATS[fmt], **params)
    except (KeyError, OSError, ValueError) as e:
        msg = f"Could not encode image as {fmt}: {e!s}"
        raise EncodeFailure(msg) from e

    data = buffer.getvalue()
    if not data:
        msg = f"Encoder produced no data for {fmt}"
        raise EncodeFailure(msg)
    logger.debug("Encoded %s: %d bytes", fmt, len(data))
    return data


def save_encoded(data: bytes, out_path: str | Path) -> Path:
    """Write encoded bytes to ``out_path``, creating parent folders."""
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
