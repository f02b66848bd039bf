"""
Error types raised by the merge pipeline.

Each error maps to one failure kind reported by the CLI. Several also
derive from the matching builtin so callers catching ``ValueError`` or
``FileNotFoundError`` keep working.
"""

from __future__ import annotations


class MergerError(Exception):
    """Base class for all merge failures."""


class InputNotFound(MergerError, FileNotFoundError):
    """A referenced input image path does not exist."""


class InsufficientImages(MergerError, ValueError):
    """Fewer images were supplied than the layout requires."""


class InvalidGeometry(MergerError, ValueError):
    """Canvas or slot dimensions would not be positive."""


class EncodeFailure(MergerError):
    """The raster encoder produced no bytes."""


class InvalidBatchSchema(MergerError, ValueError):
    """A batch file or one of its items does not match the schema."""


class SlotPaintError(MergerError):
    """Painting one slot of the output canvas failed."""

    def __init__(self, slot_index: int, message: str) -> None:
        super().__init__(message)
        self.slot_index = slot_index
