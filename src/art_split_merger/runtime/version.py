"""Lookup of the running package version for ``--version``."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from art_split_merger.logging_utils import logger

DISTRIBUTION_NAMES = ("art-split-merger", "art_split_merger")
UNKNOWN_VERSION = "0.0.0"


def _installed_version() -> str | None:
    for name in DISTRIBUTION_NAMES:
        try:
            return importlib_metadata.version(name)
        except importlib_metadata.PackageNotFoundError:
            continue
    return None


def _checkout_version(start: Path) -> str | None:
    """Read ``project.version`` from the nearest pyproject.toml above start."""
    for parent in start.parents:
        candidate = parent / "pyproject.toml"
        if not candidate.is_file():
            continue
        try:
            doc = tomlkit.parse(candidate.read_text(encoding="utf-8"))
        except (OSError, ParseError) as exc:
            logger.warning("Error reading %s: %s", candidate, exc)
            return None
        version = doc.get("project", {}).get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
    return None


def resolve_project_version() -> str:
    """
    Return the installed version, or the checkout's, or ``0.0.0``.

    Running from a source checkout without installing still reports the
    version declared in pyproject.toml.
    """
    return (
        _installed_version()
        or _checkout_version(Path(__file__).resolve())
        or UNKNOWN_VERSION
    )
