"""
Unit tests for the config module used in Art Split Merger.

Covers:
- Successful loading of a valid config.toml
- Default fallbacks for missing values
- Error handling for missing files and invalid values
- Overlaying CLI values and building MergeOptions
"""
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import art_split_merger.config as asm_config
from art_split_merger.config_defaults import (
    DEFAULT_BG_COLOR,
    DEFAULT_GAP,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_GROUPING,
    DEFAULT_LAYOUT,
    DEFAULT_MODE,
    DEFAULT_OUT_DIR,
    DEFAULT_QUALITY,
)
from art_split_merger.layout import CustomGrid, Grid2x2, Split


def create_toml_file(tmp_path: Path, data: dict[str, Any]) -> Path:
    """Write data as TOML under tmp_path and return its path."""
    doc = tomlkit.document()
    doc.update(data)
    path = tmp_path / "config.toml"
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return path


def test_load_valid_config(tmp_path: Path) -> None:
    """Test that a well-formed config.toml loads successfully."""
    path = create_toml_file(tmp_path, {
        "layout": {"layout": "custom", "rows": 3, "cols": 4, "gap": 12},
        "render": {"bg": "#fff", "mode": "stretch", "quality": 80},
        "batch": {"out_dir": "merged", "grouping": "smart", "format": "jpg"},
    })
    cfg = asm_config.ConfigLoader.load(path)
    assert cfg.layout.layout == "custom"
    assert (cfg.layout.rows, cfg.layout.cols, cfg.layout.gap) == (3, 4, 12)
    assert cfg.render.bg == "#fff"
    assert cfg.render.mode == "stretch"
    assert cfg.render.quality == 80
    assert cfg.batch.out_dir == "merged"
    assert cfg.batch.grouping == "smart"
    assert cfg.batch.format == "jpeg"


def test_missing_sections_use_defaults(tmp_path: Path) -> None:
    """Test that missing sections fall back to default values."""
    path = create_toml_file(tmp_path, {"render": {"quality": 70}})
    cfg = asm_config.ConfigLoader.load(path)
    assert cfg.render.quality == 70
    assert cfg.render.bg == DEFAULT_BG_COLOR
    assert cfg.render.mode == DEFAULT_MODE
    assert cfg.layout.layout == DEFAULT_LAYOUT
    assert cfg.layout.gap == DEFAULT_GAP
    assert (cfg.layout.rows, cfg.layout.cols) == (
        DEFAULT_GRID_ROWS, DEFAULT_GRID_COLS,
    )
    assert cfg.layout.width is None
    assert cfg.batch.out_dir == DEFAULT_OUT_DIR
    assert cfg.batch.grouping == DEFAULT_GROUPING
    assert cfg.batch.progress is True


def test_integer_layout_code_accepted(tmp_path: Path) -> None:
    path = create_toml_file(tmp_path, {"layout": {"layout": 3}})
    assert asm_config.ConfigLoader.load(path).layout.layout == "3"


def test_config_file_not_found() -> None:
    """Test that a missing config file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        asm_config.ConfigLoader.load("does_not_exist.toml")


@pytest.mark.parametrize(
    "data",
    [
        {"layout": {"gap": -1}},
        {"layout": {"layout": "5"}},
        {"layout": {"rows": 0}},
        {"layout": {"width": 0}},
        {"render": {"quality": 101}},
        {"render": {"mode": "fill"}},
        {"render": {"bg": "#12"}},
        {"batch": {"grouping": "random"}},
    ],
)
def test_invalid_values_rejected(tmp_path: Path, data: dict) -> None:
    path = create_toml_file(tmp_path, data)
    with pytest.raises(ValidationError):
        asm_config.ConfigLoader.load(path)


class TestBuildConfigFromCli:
    def test_defaults_without_args(self) -> None:
        cfg = asm_config.build_config_from_cli({})
        assert cfg == asm_config.MergerConfig()

    def test_cli_overrides_base(self) -> None:
        base = asm_config.MergerConfig.model_validate(
            {"render": {"quality": 50, "bg": "#ffffff"}},
        )
        cfg = asm_config.build_config_from_cli(
            {"quality": 75, "layout": "4", "out_dir": "o", "group": "smart"},
            base_config=base,
        )
        assert cfg.render.quality == 75
        assert cfg.render.bg == "#ffffff"
        assert cfg.layout.layout == "4"
        assert cfg.batch.out_dir == "o"
        assert cfg.batch.grouping == "smart"

    def test_none_values_ignored(self) -> None:
        base = asm_config.MergerConfig.model_validate(
            {"layout": {"width": 800}},
        )
        cfg = asm_config.build_config_from_cli(
            {"width": None, "config": None}, base_config=base,
        )
        assert cfg.layout.width == 800

    def test_no_progress_flag(self) -> None:
        cfg = asm_config.build_config_from_cli({"no_progress": True})
        assert cfg.batch.progress is False

    def test_invalid_cli_value(self) -> None:
        with pytest.raises(ValidationError):
            asm_config.build_config_from_cli({"bg": "not-a-color"})


class TestToMergeOptions:
    def test_default_options(self) -> None:
        opts = asm_config.MergerConfig().to_merge_options()
        assert opts.layout == Split()
        assert opts.bg_color == (0, 0, 0)
        assert opts.quality == DEFAULT_QUALITY
        assert opts.width is None

    def test_custom_grid_options(self) -> None:
        cfg = asm_config.MergerConfig.model_validate({
            "layout": {"layout": "custom", "rows": 1, "cols": 5, "gap": 4},
            "render": {"bg": "fff"},
        })
        opts = cfg.to_merge_options()
        assert opts.layout == CustomGrid(rows=1, cols=5)
        assert opts.gap == 4
        assert opts.bg_color == (255, 255, 255)

    def test_grid_with_size(self) -> None:
        cfg = asm_config.MergerConfig.model_validate(
            {"layout": {"layout": "4", "width": 640, "height": 480}},
        )
        opts = cfg.to_merge_options()
        assert opts.layout == Grid2x2()
        assert (opts.width, opts.height) == (640, 480)
