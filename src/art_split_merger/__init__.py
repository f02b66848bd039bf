"""Public package exports for the Art Split Merger."""

from __future__ import annotations

from .layout import (
    CropRect,
    CustomGrid,
    Grid2x2,
    MergeOptions,
    MergeResult,
    Mixed,
    Split,
    Transform,
    compose,
    fit_in_box,
    parse_bg_color,
    resolve_geometry,
)
from .main import merge_files

__all__ = [
    "CropRect",
    "CustomGrid",
    "Grid2x2",
    "MergeOptions",
    "MergeResult",
    "Mixed",
    "Split",
    "Transform",
    "compose",
    "fit_in_box",
    "merge_files",
    "parse_bg_color",
    "resolve_geometry",
]
