"""
Compositor that paints transformed images into layout slots.

Drawing goes through the small ``DrawingSurface`` protocol so the same
slot math can target any raster backend. ``PillowSurface`` is the
backend used by the CLI and the batch runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Protocol

from PIL import Image

from art_split_merger import image_io
from art_split_merger.constants import COLOR_MODE_RGB
from art_split_merger.errors import SlotPaintError
from art_split_merger.layout.core import Slot, fit_in_box, stretch_box, to_rgb
from art_split_merger.layout.layouts import resolve_geometry
from art_split_merger.layout.transforms import (
    apply_color,
    apply_geometry,
    effective_size,
)
from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

    from art_split_merger.layout.layouts import MergeOptions
    from art_split_merger.layout.transforms import Transform
    from art_split_merger.type_defs import OutputFormat

_RGB = tuple[int, int, int]


class DrawingSurface(Protocol):
    """Raster capability the compositor draws onto."""

    def fill_background(self, color: _RGB) -> None:
        """Paint the whole surface with ``color``."""

    def draw_scaled(
        self,
        image: Image.Image,
        rect: Slot,
        *,
        adjust: Callable[[Image.Image], Image.Image] | None = None,
    ) -> None:
        """Resample ``image`` to ``rect``, run ``adjust``, then paint it."""

    def encode(self, fmt: OutputFormat, quality: int) -> bytes:
        """Serialize the surface to encoded image bytes."""


class PillowSurface:
    """DrawingSurface backed by an in-memory Pillow RGB image."""

    def __init__(self, width: int, height: int) -> None:
        self.image = Image.new(COLOR_MODE_RGB, (width, height))

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return self.image.size

    def fill_background(self, color: _RGB) -> None:
        self.image.paste(color, (0, 0, *self.image.size))

    def draw_scaled(
        self,
        image: Image.Image,
        rect: Slot,
        *,
        adjust: Callable[[Image.Image], Image.Image] | None = None,
    ) -> None:
        if rect.w < 1 or rect.h < 1:
            logger.debug("Skipping empty draw rect %s", rect)
            return
        scaled = image
        if image.size != rect.size:
            scaled = image.resize(rect.size, Image.Resampling.LANCZOS)
        if adjust is not None:
            scaled = adjust(scaled)
        self.image.paste(scaled, rect.origin)

    def encode(self, fmt: OutputFormat, quality: int) -> bytes:
        return image_io.encode_image(self.image, fmt, quality)


@dataclass(frozen=True)
class MergeResult:
    """Freshly allocated composed surface and its dimensions."""

    surface: DrawingSurface
    width: int
    height: int

    @property
    def image(self) -> Image.Image:
        """Return the Pillow image behind a PillowSurface."""
        if not isinstance(self.surface, PillowSurface):
            msg = "Result was not rendered with PillowSurface"
            raise TypeError(msg)
        return self.surface.image

    def encode(self, fmt: OutputFormat, quality: int) -> bytes:
        """Encode the composed surface."""
        return self.surface.encode(fmt, quality)


def _transform_at(
    transforms: Sequence[Transform | None],
    index: int,
) -> Transform | None:
    return transforms[index] if index < len(transforms) else None


def _paint_slot(  # noqa: PLR0913
    surface: DrawingSurface,
    index: int,
    image: Image.Image,
    slot: Slot,
    transform: Transform | None,
    options: MergeOptions,
) -> None:
    """Run the transform pipeline for one image and paint it into ``slot``."""
    try:
        rgb = to_rgb(image, bg_color=options.bg_color)
        src = apply_geometry(rgb, transform)
        if options.mode == "stretch":
            box = stretch_box(slot.w, slot.h)
        else:
            box = fit_in_box(*src.size, slot.w, slot.h)
        rect = Slot(
            slot.x + box.offset_x, slot.y + box.offset_y, box.w, box.h,
        )
        adjust = None
        if transform is not None and (
            transform.brightness or transform.contrast
        ):
            adjust = partial(apply_color, transform=transform)
        surface.draw_scaled(src, rect, adjust=adjust)
    except (OSError, ValueError) as exc:
        msg = f"Failed to paint slot {index}: {exc}"
        raise SlotPaintError(index, msg) from exc
    logger.debug("Painted slot %d at %s", index, rect)


def compose(
    images: Sequence[Image.Image | None],
    options: MergeOptions,
    transforms: Sequence[Transform | None] = (),
    surface_factory: Callable[[int, int], DrawingSurface] = PillowSurface,
) -> MergeResult:
    """
    Compose ``images`` into one surface according to ``options``.

    ``images[i]`` goes into slot ``i`` with ``transforms[i]`` applied.
    ``None`` entries and missing trailing images leave their slot filled
    with the background color; images beyond the slot count are ignored.
    The caller keeps ownership of ``images``; they are never modified.
    """
    slot_count = options.layout.slot_count
    placed = list(images[:slot_count])
    sizes = [
        None if img is None
        else effective_size(*img.size, _transform_at(transforms, i))
        for i, img in enumerate(placed)
    ]
    if len(images) > slot_count:
        logger.debug(
            "Ignoring %d image(s) beyond the %d layout slots",
            len(images) - slot_count,
            slot_count,
        )

    geometry = resolve_geometry(options, sizes)
    surface = surface_factory(geometry.width, geometry.height)
    surface.fill_background(options.bg_color)

    for index, slot in enumerate(geometry.slots):
        image = placed[index] if index < len(placed) else None
        if image is None:
            continue
        _paint_slot(
            surface,
            index,
            image,
            slot,
            _transform_at(transforms, index),
            options,
        )

    return MergeResult(surface, geometry.width, geometry.height)
