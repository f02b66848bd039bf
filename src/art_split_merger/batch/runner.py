"""
Run a list of merge jobs with per-item failure isolation.

A failing item is logged and counted, then the runner moves on to the
next one. Progress is advanced after every item either way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from tqdm import tqdm

import art_split_merger.main as asm_main
from art_split_merger.batch.jobs import BatchJob, parse_batch_item
from art_split_merger.errors import MergerError
from art_split_merger.logging_utils import logger
from art_split_merger.runtime.output import (
    resolve_output_path,
    setup_output_directory,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from art_split_merger.layout import MergeOptions


class ProgressReporter(Protocol):
    """Protocol capturing the subset of tqdm's interface we rely on."""

    def update(self, n: float | None = 1) -> bool | None:
        """Advance the progress display by ``n`` units."""

    def close(self) -> None:
        """Release any resources associated with the display."""


@dataclass
class BatchReport:
    """Aggregate outcome of a batch run."""

    total: int
    success: int = 0
    failed: int = 0
    failures: list[tuple[int, str]] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every item succeeded."""
        return self.failed == 0

    def summary(self) -> str:
        """Return the one-line tally printed at the end of a batch."""
        return (
            f"{self.success} success, {self.failed} failed "
            f"out of {self.total} total."
        )


def _run_one(
    job: BatchJob,
    options: MergeOptions,
    out_dir: Path,
) -> tuple[Path, int, int]:
    out_path = resolve_output_path(job.out, out_dir)
    result = asm_main.merge_files(
        job.images,
        out_path,
        options,
        job.transforms,
        fmt=job.fmt,
    )
    return out_path, result.width, result.height


def run_batch(
    items: Sequence[BatchJob | object],
    options: MergeOptions,
    out_dir: str | Path = ".",
    *,
    show_progress: bool = True,
    progress: ProgressReporter | None = None,
) -> BatchReport:
    """
    Merge every item and return the tally.

    ``items`` may hold ready ``BatchJob`` values or raw batch-file
    entries, which are validated here so a malformed entry only fails
    itself. Relative output names are placed under ``out_dir``.
    """
    total = len(items)
    report = BatchReport(total=total)
    out_root = setup_output_directory(out_dir)
    logger.info("Batch mode: %d item(s)", total)

    bar = progress
    owns_bar = False
    if bar is None:
        bar = tqdm(total=total, desc="Merging", disable=not show_progress)
        owns_bar = True

    try:
        for index, item in enumerate(items):
            prefix = f"[{index + 1}/{total}]"
            try:
                job = (
                    item if isinstance(item, BatchJob)
                    else parse_batch_item(item, index)
                )
                out_path, width, height = _run_one(job, options, out_root)
            except (MergerError, OSError, ValueError) as exc:
                report.failed += 1
                report.failures.append((index, str(exc)))
                logger.error("%s failed: %s", prefix, exc)  # noqa: TRY400
            else:
                report.success += 1
                report.outputs.append(out_path)
                logger.info(
                    "%s %s -> %s: %dx%d",
                    prefix,
                    job.label,
                    out_path,
                    width,
                    height,
                )
            finally:
                bar.update(1)
    finally:
        if owns_bar:
            bar.close()

    log = logger.info if report.ok else logger.warning
    log("Results: %s", report.summary())
    return report
