"""Core geometry primitives shared by layouts and the compositor."""

from __future__ import annotations

import math
from dataclasses import dataclass

from PIL import Image

from art_split_merger.constants import COLOR_MODE_RGB

_RGB = tuple[int, int, int]

_SHORT_HEX_LENGTH = 3
_HEX_RGB_LENGTH = 6


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with halves rounded up.

    Python's ``round`` uses banker's rounding, which would shift slot
    edges by a pixel for ``.5`` values and break reproducibility across
    renderers.
    """
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Slot:
    """Destination rectangle on the output canvas, in pixels."""

    x: int
    y: int
    w: int
    h: int

    @property
    def origin(self) -> tuple[int, int]:
        """Top left corner."""
        return self.x, self.y

    @property
    def size(self) -> tuple[int, int]:
        """Width and height."""
        return self.w, self.h

    def clamp_to(self, canvas_w: int, canvas_h: int) -> Slot:
        """Return a copy trimmed so it does not extend past the canvas."""
        return Slot(
            self.x,
            self.y,
            max(0, min(self.w, canvas_w - self.x)),
            max(0, min(self.h, canvas_h - self.y)),
        )


@dataclass(frozen=True)
class FitBox:
    """Scaled size of a source inside a slot plus its centering offset."""

    w: int
    h: int
    offset_x: int
    offset_y: int


def fit_in_box(
    src_w: float,
    src_h: float,
    target_w: float,
    target_h: float,
) -> FitBox:
    """
    Scale a source box to fit inside a target box, keeping aspect.

    The scaled box is centered; both the size and the offset are rounded
    half up so the same inputs always land on the same pixels.
    """
    if src_w <= 0 or src_h <= 0:
        msg = f"Source size must be positive, got {src_w}x{src_h}"
        raise ValueError(msg)
    scale = min(target_w / src_w, target_h / src_h)
    w = round_half_up(src_w * scale)
    h = round_half_up(src_h * scale)
    return FitBox(
        w=w,
        h=h,
        offset_x=round_half_up((target_w - w) / 2),
        offset_y=round_half_up((target_h - h) / 2),
    )


def stretch_box(target_w: int, target_h: int) -> FitBox:
    """Fill the target exactly, ignoring the source aspect ratio."""
    return FitBox(w=target_w, h=target_h, offset_x=0, offset_y=0)


def parse_bg_color(text: str) -> _RGB:
    """Parse ``#rgb`` or ``#rrggbb`` strings (``#`` optional) into RGB."""
    stripped = text.strip().lstrip("#")
    if len(stripped) == _SHORT_HEX_LENGTH:
        stripped = "".join(ch * 2 for ch in stripped)
    if len(stripped) != _HEX_RGB_LENGTH:
        msg = f"Color must look like #rgb or #rrggbb, got {text!r}"
        raise ValueError(msg)
    try:
        red = int(stripped[0:2], 16)
        green = int(stripped[2:4], 16)
        blue = int(stripped[4:6], 16)
    except ValueError as exc:
        msg = f"Color contains invalid hex digits: {text!r}"
        raise ValueError(msg) from exc
    return red, green, blue


def to_rgb(img: Image.Image, *, bg_color: _RGB) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing over bg_color."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    ):
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)
