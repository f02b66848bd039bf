"""Batch grouping, batch-file parsing, and the batch runner."""

from .grouping import (
    group_files,
    group_sequential,
    group_smart,
    split_group_key,
)
from .jobs import (
    BatchItem,
    BatchJob,
    jobs_from_groups,
    load_batch_file,
    parse_batch_item,
)
from .runner import BatchReport, run_batch

__all__ = [
    "BatchItem",
    "BatchJob",
    "BatchReport",
    "group_files",
    "group_sequential",
    "group_smart",
    "jobs_from_groups",
    "load_batch_file",
    "parse_batch_item",
    "run_batch",
    "split_group_key",
]
