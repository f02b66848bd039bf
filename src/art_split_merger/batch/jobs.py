"""
Batch job schema and loader.

A batch file is a JSON array. Each item names its images either as a
``left``/``right`` pair or as an ``images`` list, plus an optional
``out`` filename and optional per-image ``transforms``::

    [
      {"left": "a.png", "right": "b.png", "out": "ab.png"},
      {"images": ["c.png", "d.png", "e.png"],
       "transforms": [{"rotate": 90}, null, {"flip_h": true}]}
    ]

Items are validated one at a time so a single malformed entry only
fails that entry.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from art_split_merger.constants import ADJUSTMENT_MAX, ADJUSTMENT_MIN
from art_split_merger.errors import InputNotFound, InvalidBatchSchema
from art_split_merger.layout.transforms import CropRect, Transform
from art_split_merger.runtime.output import default_output_name

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from art_split_merger.type_defs import OutputFormat


class CropSpec(BaseModel):
    """Normalized crop rectangle as written in a batch file."""

    x: float = 0.0
    y: float = 0.0
    w: float = 1.0
    h: float = 1.0


class TransformSpec(BaseModel):
    """Per-image edits as written in a batch file."""

    rotate: int = 0
    flip_h: bool = False
    flip_v: bool = False
    brightness: int = Field(0, ge=ADJUSTMENT_MIN, le=ADJUSTMENT_MAX)
    contrast: int = Field(0, ge=ADJUSTMENT_MIN, le=ADJUSTMENT_MAX)
    crop: CropSpec | None = None

    def to_transform(self) -> Transform:
        """Convert to the immutable core ``Transform``."""
        crop = None
        if self.crop is not None:
            crop = CropRect(self.crop.x, self.crop.y, self.crop.w, self.crop.h)
        base = Transform(
            flip_h=self.flip_h,
            flip_v=self.flip_v,
            brightness=self.brightness,
            contrast=self.contrast,
            crop=crop,
        )
        # rotated() normalizes -90, 450 and friends into 0..270
        return base.rotated(self.rotate)


class BatchItem(BaseModel):
    """One entry of a batch file."""

    left: str | None = None
    right: str | None = None
    images: list[str] | None = None
    out: str | None = None
    transforms: list[TransformSpec | None] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_images(self) -> BatchItem:
        has_pair = self.left is not None and self.right is not None
        if not has_pair and not self.images:
            msg = "item needs either 'left' and 'right' or 'images'"
            raise ValueError(msg)
        return self

    @property
    def image_paths(self) -> list[str]:
        """Image paths in slot order; ``images`` wins over the pair."""
        if self.images:
            return list(self.images)
        return [str(self.left), str(self.right)]


@dataclass(frozen=True)
class BatchJob:
    """Validated merge job: inputs in slot order and an output name."""

    images: tuple[Path, ...]
    out: Path
    transforms: tuple[Transform | None, ...] = ()
    fmt: OutputFormat | None = None

    @property
    def label(self) -> str:
        """Short description used in progress lines."""
        return " + ".join(p.name for p in self.images)


def parse_batch_item(raw: object, index: int) -> BatchJob:
    """
    Validate one raw batch entry and turn it into a ``BatchJob``.

    Raises:
        InvalidBatchSchema: If the entry does not match the schema

    """
    try:
        item = BatchItem.model_validate(raw)
        transforms = tuple(
            None if spec is None else spec.to_transform()
            for spec in item.transforms
        )
    except (ValidationError, ValueError) as e:
        msg = f"Batch item {index + 1} is invalid: {e}"
        raise InvalidBatchSchema(msg) from e
    paths = tuple(Path(p) for p in item.image_paths)
    out = Path(item.out) if item.out else Path(default_output_name(paths[0]))
    return BatchJob(images=paths, out=out, transforms=transforms)


def load_batch_file(path: str | Path) -> list[Any]:
    """
    Read a batch file and return its raw items.

    Items are not validated here; see ``parse_batch_item``.

    Raises:
        InputNotFound: If the batch file does not exist
        InvalidBatchSchema: If the file is not a JSON array

    """
    batch_path = Path(path)
    if not batch_path.is_file():
        msg = f"Batch file not found: {path}"
        raise InputNotFound(msg)
    try:
        with batch_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"Batch file {path} is not valid JSON: {e}"
        raise InvalidBatchSchema(msg) from e
    if not isinstance(data, list):
        msg = (
            "Batch file must be a JSON array of "
            "{left, right, out} or {images, out} objects"
        )
        raise InvalidBatchSchema(msg)
    return data


def jobs_from_groups(
    groups: Sequence[Sequence[Path]],
    fmt: OutputFormat = "png",
) -> list[BatchJob]:
    """Build one job per group, named after the group's first file."""
    return [
        BatchJob(
            images=tuple(group),
            out=Path(default_output_name(group[0], fmt)),
            fmt=fmt,
        )
        for group in groups
    ]
