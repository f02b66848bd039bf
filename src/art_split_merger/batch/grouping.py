"""
Partition a flat list of files into fixed-size merge groups.

Two strategies are offered. ``sequential`` sorts by filename and chunks
the list in order. ``smart`` groups files by a key derived from the
filename, so ``cover_L.png`` and ``cover_R.png`` end up together even
when other files sort between them.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

    from art_split_merger.type_defs import GroupingMode

# Separators that end a group key; the last occurrence of any of them wins
GROUP_KEY_SEPARATORS = ("_", "-", " ")

Group = tuple[Path, ...]


def split_group_key(filename: str) -> tuple[str, str]:
    """
    Split a filename into ``(group key, suffix)``.

    The extension is dropped, then the name is cut at the last separator
    from ``GROUP_KEY_SEPARATORS``. A separator at index 0 does not count,
    so ``_cover`` keys as ``_cover``. Without a usable separator the whole
    stem is the key and the suffix is empty.

    >>> split_group_key("cover_L.png")
    ('cover', 'L')
    >>> split_group_key("album-art final.jpg")
    ('album-art', 'final')
    """
    stem = Path(filename).stem
    cut = max(stem.rfind(sep) for sep in GROUP_KEY_SEPARATORS)
    if cut <= 0:
        return stem, ""
    return stem[:cut], stem[cut + 1:]


def _sort_by_name(files: Iterable[str | Path]) -> list[Path]:
    # Stable: equal names keep their input order
    return sorted((Path(f) for f in files), key=lambda p: p.name)


def _chunk(files: Sequence[Path], size: int) -> list[Group]:
    """Chunk into groups of exactly ``size``; a short tail is dropped."""
    full = len(files) - len(files) % size
    return [tuple(files[i:i + size]) for i in range(0, full, size)]


def group_sequential(files: Iterable[str | Path], size: int) -> list[Group]:
    """Sort files by name and chunk them into consecutive groups."""
    ordered = _sort_by_name(files)
    groups = _chunk(ordered, size)
    dropped = len(ordered) - len(groups) * size
    if dropped:
        logger.warning(
            "Ignoring %d trailing file(s) that do not fill a group of %d",
            dropped,
            size,
        )
    return groups


def group_smart(files: Iterable[str | Path], size: int) -> list[Group]:
    """Group files sharing a filename key, keys in lexicographic order."""
    by_key: dict[str, list[Path]] = defaultdict(list)
    for path in _sort_by_name(files):
        key, _ = split_group_key(path.name)
        by_key[key].append(path)

    groups: list[Group] = []
    for key in sorted(by_key):
        members = by_key[key]
        chunks = _chunk(members, size)
        if not chunks:
            logger.debug(
                "Key %r has %d file(s), fewer than %d; skipped",
                key,
                len(members),
                size,
            )
        groups.extend(chunks)
    return groups


def group_files(
    files: Iterable[str | Path],
    size: int,
    mode: GroupingMode = "sequential",
) -> list[Group]:
    """
    Partition ``files`` into groups of ``size`` using ``mode``.

    Raises:
        ValueError: If size is below 1 or mode is unknown

    """
    if size < 1:
        msg = f"Group size must be at least 1, got {size}"
        raise ValueError(msg)
    match mode:
        case "sequential":
            groups = group_sequential(files, size)
        case "smart":
            groups = group_smart(files, size)
        case _:
            msg = f"Unknown grouping mode {mode!r}"
            raise ValueError(msg)
    logger.debug("Grouped files into %d %s group(s)", len(groups), mode)
    return groups
