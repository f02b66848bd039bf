"""Runtime utilities for validation, output paths, and version lookup."""

from .output import (
    default_output_name,
    resolve_output_path,
    setup_output_directory,
)
from .validation import validate_input_paths, validate_quality
from .version import resolve_project_version

__all__ = [
    "default_output_name",
    "resolve_output_path",
    "resolve_project_version",
    "setup_output_directory",
    "validate_input_paths",
    "validate_quality",
]
