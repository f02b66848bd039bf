"""Helpers for managing output locations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from art_split_merger.config_defaults import MERGED_SUFFIX
from art_split_merger.image_io import extension_for
from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from art_split_merger.type_defs import OutputFormat


def setup_output_directory(output_path: str | Path) -> Path:
    """Create the output directory if needed and return its path."""
    resolved_path = Path(output_path)
    if not resolved_path.exists():
        resolved_path.mkdir(parents=True, exist_ok=True)
        logger.info("Created output directory: %s", resolved_path)
    return resolved_path


def default_output_name(
    first_input: str | Path,
    fmt: OutputFormat = "png",
) -> str:
    """Build ``<first stem>_merged.<ext>`` for a group of inputs."""
    return f"{Path(first_input).stem}{MERGED_SUFFIX}{extension_for(fmt)}"


def resolve_output_path(out: str | Path, out_dir: str | Path) -> Path:
    """Join a relative ``out`` onto ``out_dir``; absolute paths win."""
    path = Path(out)
    return path if path.is_absolute() else Path(out_dir) / path
