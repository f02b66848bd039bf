"""
Per-image transform pipeline.

A ``Transform`` is applied in a fixed order: crop, quarter-turn rotation,
flips, then brightness and contrast. The geometric steps run on the full
resolution source before it is scaled into a slot; the color step runs
on the already scaled pixels so repeated resampling never compounds
rounding error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

import numpy as np
from PIL import Image, ImageEnhance

from art_split_merger.constants import (
    ADJUSTMENT_MAX,
    ADJUSTMENT_MIN,
    COLOR_MODE_RGB,
    FULL_TURN,
    MID_GRAY,
    MIN_CROP_FRACTION,
    QUARTER_TURN,
)
from art_split_merger.logging_utils import logger

_EPSILON = 1e-9

# Clockwise quarter turns mapped onto Pillow's counter-clockwise transposes
_ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _clamp_span(start: float, length: float) -> tuple[float, float]:
    """Force one normalized ``(start, length)`` axis into ``[0, 1]``."""
    if not 0.0 <= start < 1.0:
        start = _clamp(start, 0.0, 1.0 - MIN_CROP_FRACTION)
    if length <= 0:
        return min(start, 1.0 - MIN_CROP_FRACTION), MIN_CROP_FRACTION
    return start, min(length, 1.0 - start)


@dataclass(frozen=True)
class CropRect:
    """Crop region normalized to the source size, all values in [0, 1]."""

    x: float
    y: float
    w: float
    h: float

    def is_valid(self) -> bool:
        """Return True if the rect lies inside the unit square."""
        return (
            0 <= self.x < 1
            and 0 <= self.y < 1
            and self.w > 0
            and self.h > 0
            and self.x + self.w <= 1 + _EPSILON
            and self.y + self.h <= 1 + _EPSILON
        )

    def clamped(self) -> CropRect:
        """
        Return a copy forced into the unit square.

        An origin inside ``[0, 1)`` is kept and an overflowing size is
        trimmed to the edge. An origin outside that range is pulled back
        to ``[0, 1 - MIN_CROP_FRACTION]``. A non-positive size becomes
        ``MIN_CROP_FRACTION``, moving the origin only when that minimum
        would not fit.
        """
        if self.is_valid():
            return self
        x, w = _clamp_span(self.x, self.w)
        y, h = _clamp_span(self.y, self.h)
        fixed = CropRect(x, y, w, h)
        logger.warning("Crop %s out of bounds, clamped to %s", self, fixed)
        return fixed

    def to_pixels(self, src_w: int, src_h: int) -> tuple[int, int, int, int]:
        """Return the (left, top, width, height) box, floored to pixels."""
        left = math.floor(self.x * src_w)
        top = math.floor(self.y * src_h)
        width = max(1, math.floor(self.w * src_w))
        height = max(1, math.floor(self.h * src_h))
        return left, top, width, height


@dataclass(frozen=True)
class Transform:
    """
    Geometric and color edits attached to one source image.

    Instances are immutable. The ``rotated``/``with_*`` setters return a
    new value, so a transform bound to one slot can never leak into
    another merge.
    """

    rotate: int = 0
    flip_h: bool = False
    flip_v: bool = False
    brightness: int = 0
    contrast: int = 0
    crop: CropRect | None = field(default=None)

    def __post_init__(self) -> None:
        if self.rotate not in (0, *_ROTATIONS):
            msg = f"rotate must be one of 0, 90, 180, 270, got {self.rotate}"
            raise ValueError(msg)
        for name in ("brightness", "contrast"):
            value = getattr(self, name)
            if not ADJUSTMENT_MIN <= value <= ADJUSTMENT_MAX:
                msg = (
                    f"{name} must be between {ADJUSTMENT_MIN} and "
                    f"{ADJUSTMENT_MAX}, got {value}"
                )
                raise ValueError(msg)
        if self.crop is not None:
            object.__setattr__(self, "crop", self.crop.clamped())

    @property
    def is_identity(self) -> bool:
        """True when applying the transform leaves the image unchanged."""
        return self == Transform()

    @property
    def swaps_axes(self) -> bool:
        """True for quarter turns that exchange width and height."""
        return self.rotate in (90, 270)

    def rotated(self, degrees: int) -> Transform:
        """Return a copy rotated by a multiple of 90 degrees (clockwise)."""
        if degrees % QUARTER_TURN:
            msg = f"Rotation must be a multiple of 90, got {degrees}"
            raise ValueError(msg)
        return replace(self, rotate=(self.rotate + degrees) % FULL_TURN)

    def with_flip_h(self) -> Transform:
        """Toggle the horizontal mirror."""
        return replace(self, flip_h=not self.flip_h)

    def with_flip_v(self) -> Transform:
        """Toggle the vertical mirror."""
        return replace(self, flip_v=not self.flip_v)

    def with_brightness(self, value: int) -> Transform:
        """Set brightness, clamped to the supported range."""
        return replace(
            self,
            brightness=int(_clamp(value, ADJUSTMENT_MIN, ADJUSTMENT_MAX)),
        )

    def with_contrast(self, value: int) -> Transform:
        """Set contrast, clamped to the supported range."""
        return replace(
            self,
            contrast=int(_clamp(value, ADJUSTMENT_MIN, ADJUSTMENT_MAX)),
        )

    def with_crop(self, crop: CropRect | None) -> Transform:
        """Set or clear the crop rectangle."""
        return replace(self, crop=crop)


IDENTITY = Transform()


def effective_size(
    src_w: int,
    src_h: int,
    transform: Transform | None = None,
) -> tuple[int, int]:
    """Return the width and height after the crop and rotation steps."""
    t = transform or IDENTITY
    w, h = src_w, src_h
    if t.crop is not None:
        _, _, w, h = t.crop.to_pixels(src_w, src_h)
    if t.swaps_axes:
        w, h = h, w
    return w, h


def apply_geometry(
    img: Image.Image,
    transform: Transform | None,
) -> Image.Image:
    """Crop, rotate and flip ``img``; the input is never modified."""
    t = transform or IDENTITY
    out = img
    if t.crop is not None:
        left, top, width, height = t.crop.to_pixels(*img.size)
        out = out.crop((left, top, left + width, top + height))
    if t.rotate:
        out = out.transpose(_ROTATIONS[t.rotate])
    if t.flip_h:
        out = out.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    if t.flip_v:
        out = out.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return out


def _adjust_contrast(img: Image.Image, contrast: int) -> Image.Image:
    """Scale every channel around mid-gray by ``(100 + contrast) / 100``."""
    factor = (100 + contrast) / 100
    arr = np.asarray(img, dtype=np.float32)
    adjusted = (arr - MID_GRAY) * factor + MID_GRAY
    clipped = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
    return Image.fromarray(clipped)


def apply_color(img: Image.Image, transform: Transform | None) -> Image.Image:
    """
    Apply brightness then contrast to an RGB image.

    Brightness multiplies every channel by ``(100 + brightness) / 100``;
    contrast stretches or compresses channel values around mid-gray.
    """
    t = transform or IDENTITY
    out = img
    if t.brightness:
        out = ImageEnhance.Brightness(out).enhance((100 + t.brightness) / 100)
    if t.contrast:
        out = _adjust_contrast(out.convert(COLOR_MODE_RGB), t.contrast)
    return out
