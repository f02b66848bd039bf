"""
Configuration schema and loader for the Art Split Merger.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field, field_validator

from art_split_merger.config_defaults import (
    DEFAULT_BG_COLOR,
    DEFAULT_GAP,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_GROUP_FORMAT,
    DEFAULT_GROUPING,
    DEFAULT_LAYOUT,
    DEFAULT_MODE,
    DEFAULT_OUT_DIR,
    DEFAULT_QUALITY,
    DEFAULT_SHOW_PROGRESS,
)
from art_split_merger.constants import QUALITY_MAX, QUALITY_MIN
from art_split_merger.layout.core import parse_bg_color
from art_split_merger.layout.layouts import MergeOptions, parse_layout
from art_split_merger.type_defs import (
    GroupingMode,
    LayoutCode,
    OutputFormat,
    ResizeMode,
)

# CLI destinations mapped onto (section, field) of MergerConfig
_CLI_FIELDS: dict[str, tuple[str, str]] = {
    "layout": ("layout", "layout"),
    "rows": ("layout", "rows"),
    "cols": ("layout", "cols"),
    "width": ("layout", "width"),
    "height": ("layout", "height"),
    "gap": ("layout", "gap"),
    "bg": ("render", "bg"),
    "mode": ("render", "mode"),
    "quality": ("render", "quality"),
    "out_dir": ("batch", "out_dir"),
    "group": ("batch", "grouping"),
    "format": ("batch", "format"),
}


class LayoutConfig(BaseModel):
    """Choose the layout variant and canvas dimensions."""

    layout: LayoutCode = Field(DEFAULT_LAYOUT)
    rows: int = Field(DEFAULT_GRID_ROWS, ge=1)
    cols: int = Field(DEFAULT_GRID_COLS, ge=1)
    width: int | None = Field(None, ge=1)
    height: int | None = Field(None, ge=1)
    gap: int = Field(DEFAULT_GAP, ge=0)

    @field_validator("layout", mode="before")
    @classmethod
    def _layout_as_text(cls, value: Any) -> Any:  # noqa: ANN401
        # TOML lets users write ``layout = 4``
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RenderConfig(BaseModel):
    """Control background, scaling mode and encoder quality."""

    bg: str = Field(DEFAULT_BG_COLOR)
    mode: ResizeMode = Field(DEFAULT_MODE)
    quality: int = Field(DEFAULT_QUALITY, ge=QUALITY_MIN, le=QUALITY_MAX)

    @field_validator("bg")
    @classmethod
    def _check_bg(cls, value: str) -> str:
        parse_bg_color(value)
        return value


class BatchConfig(BaseModel):
    """Configure batch output location, grouping and progress display."""

    out_dir: str = Field(DEFAULT_OUT_DIR)
    grouping: GroupingMode = Field(DEFAULT_GROUPING)
    format: OutputFormat = Field(DEFAULT_GROUP_FORMAT)
    progress: bool = DEFAULT_SHOW_PROGRESS

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, str) and value.lower() == "jpg":
            return "jpeg"
        return value


class MergerConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    render: RenderConfig = Field(
        default_factory=lambda: RenderConfig.model_validate({}),
    )
    batch: BatchConfig = Field(
        default_factory=lambda: BatchConfig.model_validate({}),
    )

    def to_merge_options(self) -> MergeOptions:
        """Build the immutable options value consumed by the core."""
        return MergeOptions(
            layout=parse_layout(
                self.layout.layout, self.layout.rows, self.layout.cols,
            ),
            width=self.layout.width,
            height=self.layout.height,
            bg_color=parse_bg_color(self.render.bg),
            mode=self.render.mode,
            gap=self.layout.gap,
            quality=self.render.quality,
        )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str | Path) -> MergerConfig:
        """
        Load a merger configuration from a TOML file.

        Returns a validated MergerConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return MergerConfig.model_validate(doc.unwrap())


def build_config_from_cli(
    args: dict[str, Any],
    base_config: MergerConfig | None = None,
) -> MergerConfig:
    """
    Overlay explicitly given CLI values onto a base configuration.

    Keys that are absent or ``None`` in ``args`` keep the value from
    ``base_config`` (or the defaults). ``no_progress`` turns the batch
    progress bar off.
    """
    base = base_config or MergerConfig.model_validate({})
    data = base.model_dump()
    for key, (section, field) in _CLI_FIELDS.items():
        value = args.get(key)
        if value is not None:
            data[section][field] = value
    if args.get("no_progress"):
        data["batch"]["progress"] = False
    return MergerConfig.model_validate(data)
