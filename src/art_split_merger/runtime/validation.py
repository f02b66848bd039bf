"""Input validation helpers run before any image is decoded."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from art_split_merger.constants import QUALITY_MAX, QUALITY_MIN
from art_split_merger.errors import InputNotFound

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


def validate_input_paths(paths: Sequence[str | Path]) -> None:
    """Ensure every provided image path points to a file."""
    for index, path in enumerate(paths):
        if not Path(path).is_file():
            msg = f"Image {index + 1} not found: {path}"
            raise InputNotFound(msg)


def validate_quality(quality: int) -> None:
    """Validate that the encoder quality falls within 1..100."""
    if quality < QUALITY_MIN or quality > QUALITY_MAX:
        msg = f"Quality must be between 1 and 100, got {quality}"
        raise ValueError(msg)
