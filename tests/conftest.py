"""
Test configuration and shared fixtures for art_split_merger.

This module defines reusable pytest fixtures that build small solid
color images in memory and on disk. These fixtures support all test
modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from art_split_merger.constants import COLOR_MODE_RGB
from art_split_merger.logging_utils import logger

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 100x100 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (100, 100), color=RED)


@pytest.fixture
def make_image_file(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory that saves a solid color image under tmp_path.

    Returns:
        Callable taking (name, size, color) and returning the saved path.

    """

    def _make(
        name: str,
        size: tuple[int, int] = (64, 64),
        color: tuple[int, ...] = RED,
        mode: str = COLOR_MODE_RGB,
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color=color).save(path)
        return path

    return _make


@pytest.fixture
def left_right_pair(make_image_file: Callable[..., Path]) -> tuple[Path, Path]:
    """Red left half and blue right half, both 100x200."""
    return (
        make_image_file("cover_L.png", (100, 200), RED),
        make_image_file("cover_R.png", (100, 200), BLUE),
    )


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide a dedicated output directory under tmp_path."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the merger logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
