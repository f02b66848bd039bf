"""
Defines shared type aliases for the Art Split Merger.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

LayoutCode = Literal["2", "3", "4", "custom"]
ResizeMode = Literal["fit", "stretch"]
OutputFormat = Literal["png", "jpeg", "webp"]
GroupingMode = Literal["sequential", "smart"]
