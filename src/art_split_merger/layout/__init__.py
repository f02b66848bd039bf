"""
Layout composition engine: geometry, transforms and compositing.

The most commonly used entry points are re-exported here so callers can
import them from ``art_split_merger.layout`` directly.
"""

from __future__ import annotations

from . import compositor, core, layouts, transforms
from .compositor import (
    DrawingSurface,
    MergeResult,
    PillowSurface,
    compose,
)
from .core import (
    FitBox,
    Slot,
    fit_in_box,
    parse_bg_color,
    round_half_up,
    stretch_box,
    to_rgb,
)
from .layouts import (
    CustomGrid,
    Geometry,
    Grid2x2,
    Layout,
    MergeOptions,
    Mixed,
    Split,
    parse_layout,
    require_images,
    resolve_geometry,
)
from .transforms import (
    CropRect,
    Transform,
    apply_color,
    apply_geometry,
    effective_size,
)

__all__ = [
    "CropRect",
    "CustomGrid",
    "DrawingSurface",
    "FitBox",
    "Geometry",
    "Grid2x2",
    "Layout",
    "MergeOptions",
    "MergeResult",
    "Mixed",
    "PillowSurface",
    "Slot",
    "Split",
    "Transform",
    "apply_color",
    "apply_geometry",
    "compose",
    "compositor",
    "core",
    "effective_size",
    "fit_in_box",
    "layouts",
    "parse_bg_color",
    "parse_layout",
    "require_images",
    "resolve_geometry",
    "round_half_up",
    "stretch_box",
    "to_rgb",
    "transforms",
]
