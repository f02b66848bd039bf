"""
Layout variants and the geometry resolver.

Each layout is a small frozen dataclass; ``resolve_geometry`` dispatches
on the variant and returns the canvas size plus one slot per cell, in
painting order. Nothing here touches pixels, so the same numbers drive
both live previews and batch output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from art_split_merger.config_defaults import (
    DEFAULT_CANVAS_SIZE,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_QUALITY,
)
from art_split_merger.constants import COLOR_BLACK, QUALITY_MAX, QUALITY_MIN
from art_split_merger.errors import InsufficientImages, InvalidGeometry
from art_split_merger.layout.core import Slot, round_half_up
from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from art_split_merger.type_defs import LayoutCode, ResizeMode

_RGB = tuple[int, int, int]
_Size = tuple[int, int]

_SPLIT_SLOTS = 2


@dataclass(frozen=True)
class Split:
    """Two images side by side, canvas sized from the sources."""

    code = "2"

    @property
    def slot_count(self) -> int:
        """Number of images the layout places."""
        return _SPLIT_SLOTS


@dataclass(frozen=True)
class Mixed:
    """Two images on top, one full-width image below."""

    code = "3"

    @property
    def slot_count(self) -> int:
        """Number of images the layout places."""
        return 3


@dataclass(frozen=True)
class Grid2x2:
    """Four equal quadrants."""

    code = "4"

    @property
    def slot_count(self) -> int:
        """Number of images the layout places."""
        return 4


@dataclass(frozen=True)
class CustomGrid:
    """Arbitrary rows x cols grid of equal cells."""

    rows: int = DEFAULT_GRID_ROWS
    cols: int = DEFAULT_GRID_COLS

    code = "custom"

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            msg = (
                "Grid must have at least one cell, "
                f"got {self.rows}x{self.cols}"
            )
            raise ValueError(msg)

    @property
    def slot_count(self) -> int:
        """Number of images the layout places."""
        return self.rows * self.cols


Layout = Split | Mixed | Grid2x2 | CustomGrid


def parse_layout(
    code: LayoutCode | str,
    rows: int = DEFAULT_GRID_ROWS,
    cols: int = DEFAULT_GRID_COLS,
) -> Layout:
    """Map a layout code (``2``, ``3``, ``4`` or ``custom``) to a variant."""
    match str(code).lower():
        case "2":
            return Split()
        case "3":
            return Mixed()
        case "4":
            return Grid2x2()
        case "custom":
            return CustomGrid(rows=rows, cols=cols)
        case _:
            msg = f"Unknown layout {code!r}; expected 2, 3, 4 or custom"
            raise ValueError(msg)


@dataclass(frozen=True)
class MergeOptions:
    """
    Immutable settings for one merge call.

    ``width`` and ``height`` are optional overrides; ``None`` means auto
    for the split layout and the default canvas edge for the others.
    """

    layout: Layout = Split()
    width: int | None = None
    height: int | None = None
    bg_color: _RGB = COLOR_BLACK
    mode: ResizeMode = "fit"
    gap: int = 0
    quality: int = DEFAULT_QUALITY

    def __post_init__(self) -> None:
        if self.gap < 0:
            msg = f"gap must be >= 0, got {self.gap}"
            raise ValueError(msg)
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and value < 1:
                msg = f"{name} must be positive, got {value}"
                raise ValueError(msg)
        if not QUALITY_MIN <= self.quality <= QUALITY_MAX:
            msg = f"quality must be between 1 and 100, got {self.quality}"
            raise ValueError(msg)
        if self.mode not in ("fit", "stretch"):
            msg = f"mode must be 'fit' or 'stretch', got {self.mode!r}"
            raise ValueError(msg)


@dataclass(frozen=True)
class Geometry:
    """Output canvas size and the ordered slot rectangles."""

    width: int
    height: int
    slots: tuple[Slot, ...]


def require_images(layout: Layout, present: int) -> None:
    """Raise InsufficientImages when a split merge lacks either side."""
    if isinstance(layout, Split) and present < _SPLIT_SLOTS:
        msg = (
            f"Split layout requires at least {_SPLIT_SLOTS} images, "
            f"got {present}"
        )
        raise InsufficientImages(msg)


def _split_canvas(
    left: _Size,
    right: _Size,
    opts: MergeOptions,
) -> _Size:
    """
    Derive the split canvas from the two effective source sizes.

    Each side is scaled and rounded on its own before the widths are
    summed; rounding the total instead would drift by a pixel.
    """
    (lw, lh), (rw, rh) = left, right
    gap = opts.gap
    if opts.width is not None and opts.height is not None:
        return opts.width, opts.height
    if opts.width is not None:
        half_w = (opts.width - gap) / 2
        out_h = round_half_up(max(lh * half_w / lw, rh * half_w / rw))
        return opts.width, out_h
    if opts.height is not None:
        target_h = opts.height
    else:
        target_h = max(lh, rh)
    out_w = (
        round_half_up(lw * target_h / lh)
        + round_half_up(rw * target_h / rh)
        + gap
    )
    return out_w, target_h


def _split_geometry(
    sizes: Sequence[_Size | None],
    opts: MergeOptions,
) -> Geometry:
    require_images(
        opts.layout, sum(s is not None for s in sizes[:_SPLIT_SLOTS]),
    )
    left = cast("_Size", sizes[0])
    right = cast("_Size", sizes[1])
    out_w, out_h = _split_canvas(left, right, opts)
    _check_canvas(out_w, out_h)
    if out_w - opts.gap < _SPLIT_SLOTS:
        msg = f"Gap {opts.gap} leaves no room in a {out_w}px wide canvas"
        raise InvalidGeometry(msg)
    half_w = round_half_up((out_w - opts.gap) / 2)
    slots = (
        Slot(0, 0, half_w, out_h),
        Slot(half_w + opts.gap, 0, out_w - half_w - opts.gap, out_h),
    )
    return Geometry(out_w, out_h, slots)


def _fixed_canvas(opts: MergeOptions) -> _Size:
    return (
        opts.width or DEFAULT_CANVAS_SIZE,
        opts.height or DEFAULT_CANVAS_SIZE,
    )


def _cell_size(extent: int, count: int, gap: int) -> float:
    cell = (extent - (count - 1) * gap) / count
    if cell < 1:
        msg = (
            f"Gap {gap} leaves no room for {count} cells across {extent}px"
        )
        raise InvalidGeometry(msg)
    return cell


def _span(start: float, length: float) -> tuple[int, int]:
    """
    Round a fractional span to ``(offset, length)`` in whole pixels.

    Both edges are rounded, so neighbouring spans never overlap and the
    last one ends exactly on the canvas edge. Rounding the cell size
    instead would give equal widths, but a 10.6px cell would then end at
    22 while the next starts at 21.
    """
    left = round_half_up(start)
    return left, round_half_up(start + length) - left


def _grid_slots(
    out_w: int,
    out_h: int,
    rows: int,
    cols: int,
    gap: int,
) -> tuple[Slot, ...]:
    """Return row-major slots for an evenly divided grid."""
    cell_w = _cell_size(out_w, cols, gap)
    cell_h = _cell_size(out_h, rows, gap)
    slots = []
    for r in range(rows):
        y, h = _span(r * (cell_h + gap), cell_h)
        for c in range(cols):
            x, w = _span(c * (cell_w + gap), cell_w)
            slots.append(Slot(x, y, w, h).clamp_to(out_w, out_h))
    return tuple(slots)


def _mixed_geometry(opts: MergeOptions) -> Geometry:
    out_w, out_h = _fixed_canvas(opts)
    _check_canvas(out_w, out_h)
    half_w = _cell_size(out_w, 2, opts.gap)
    half_h = _cell_size(out_h, 2, opts.gap)
    _, top_w = _span(0, half_w)
    right_x, right_w = _span(half_w + opts.gap, half_w)
    _, top_h = _span(0, half_h)
    bottom_y, bottom_h = _span(half_h + opts.gap, half_h)
    slots = (
        Slot(0, 0, top_w, top_h),
        Slot(right_x, 0, right_w, top_h),
        Slot(0, bottom_y, out_w, bottom_h),
    )
    return Geometry(
        out_w, out_h, tuple(s.clamp_to(out_w, out_h) for s in slots),
    )


def _check_canvas(out_w: int, out_h: int) -> None:
    if out_w < 1 or out_h < 1:
        msg = f"Canvas must be positive, got {out_w}x{out_h}"
        raise InvalidGeometry(msg)


def resolve_geometry(
    opts: MergeOptions,
    sizes: Sequence[_Size | None] = (),
) -> Geometry:
    """
    Compute the canvas size and slot rectangles for one merge.

    ``sizes`` holds the effective (post crop and rotation) size of the
    image in each slot, or ``None`` for an empty slot. Only the split
    layout reads them; the other layouts use a fixed canvas.
    """
    match opts.layout:
        case Split():
            geometry = _split_geometry(sizes, opts)
        case Mixed():
            geometry = _mixed_geometry(opts)
        case Grid2x2():
            out_w, out_h = _fixed_canvas(opts)
            _check_canvas(out_w, out_h)
            geometry = Geometry(
                out_w, out_h, _grid_slots(out_w, out_h, 2, 2, opts.gap),
            )
        case CustomGrid(rows=rows, cols=cols):
            out_w, out_h = _fixed_canvas(opts)
            _check_canvas(out_w, out_h)
            geometry = Geometry(
                out_w, out_h, _grid_slots(out_w, out_h, rows, cols, opts.gap),
            )
    logger.debug(
        "Resolved %s layout: %dx%d canvas, %d slots",
        type(opts.layout).__name__,
        geometry.width,
        geometry.height,
        len(geometry.slots),
    )
    return geometry
