"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import art_split_merger.batch as asm_batch
import art_split_merger.config as asm_config
import art_split_merger.main as asm_main
from art_split_merger.config_defaults import (
    DEFAULT_BG_COLOR,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_QUALITY,
)
from art_split_merger.errors import MergerError
from art_split_merger.logging_utils import logger, set_verbosity
from art_split_merger.runtime import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from art_split_merger.layout import MergeOptions

PROG = "art-split-merger"


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog=PROG,
        description="Merge split artwork images into one picture.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"  {PROG} cover_a.png cover_b.png --out merged.png\n"
            f"  {PROG} a.jpg b.jpg --width 3000 --height 1500 "
            "--out output.png\n"
            f"  {PROG} --batch pairs.json --out-dir ./output/ --bg '#1a1a1a'\n"
            f"  {PROG} shots/*.png --layout 4 --group smart --out-dir grids/"
        ),
    )

    p.add_argument(
        "inputs", nargs="*", metavar="IMAGE",
        help="Input image paths, in slot order")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--layout", choices=["2", "3", "4", "custom"],
        help="2 = split, 3 = two over one, 4 = 2x2 grid, custom = rows x cols",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--gap", type=int, help="Gap between slots in pixels (default: 0)",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--rows", type=int,
        help=f"Rows for the custom layout (default: {DEFAULT_GRID_ROWS})",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--cols", type=int,
        help=f"Columns for the custom layout (default: {DEFAULT_GRID_COLS})",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--width", type=int, help="Output width (default: auto)",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--height", type=int, help="Output height (default: auto)",
        default=argparse.SUPPRESS)

    render = p.add_argument_group("render")
    render.add_argument(
        "--bg", type=str,
        help=f"Background color as #rgb or #rrggbb "
             f"(default: {DEFAULT_BG_COLOR})",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--mode", choices=["fit", "stretch"],
        help="Resize mode (default: fit)", default=argparse.SUPPRESS)
    render.add_argument(
        "--quality", type=int,
        help=f"JPEG/WebP quality 1-100 (default: {DEFAULT_QUALITY})",
        default=argparse.SUPPRESS)

    output = p.add_argument_group("output")
    output.add_argument(
        "--out", type=str,
        help="Output file; the extension picks PNG, JPEG or WebP")
    output.add_argument(
        "--out-dir", dest="out_dir", type=str,
        help="Output directory for batch and grouped runs",
        default=argparse.SUPPRESS)

    batch = p.add_argument_group("batch")
    batch.add_argument(
        "--batch", type=str,
        help="JSON file with {left, right, out} or {images, out} items")
    batch.add_argument(
        "--group", choices=["sequential", "smart"],
        help="Group the input images into merges of the layout's size",
        default=argparse.SUPPRESS)
    batch.add_argument(
        "--format", choices=["png", "jpg", "webp"],
        help="Output format for grouped merges (default: png)",
        default=argparse.SUPPRESS)
    batch.add_argument(
        "--no-progress", action="store_true",
        help="Disable the batch progress bar")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without merging")
    cfg.add_argument(
        "--verbose", action="store_true",
        help="Enable debug logging")
    cfg.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    return p


def log_parameters(cfg: asm_config.MergerConfig) -> None:
    """Log the effective merge parameters."""
    layout = cfg.layout
    logger.info("Layout: %s", layout.layout)
    if layout.layout == "custom":
        logger.info("Grid: %dx%d", layout.rows, layout.cols)
    logger.info(
        "Size: %s x %s",
        layout.width or "auto",
        layout.height or "auto",
    )
    logger.info("Gap: %d", layout.gap)
    logger.info("Background: %s", cfg.render.bg)
    logger.info("Mode: %s", cfg.render.mode)
    logger.info("Quality: %d", cfg.render.quality)


def _wants_grouping(args: argparse.Namespace) -> bool:
    if getattr(args, "group", None):
        return True
    return bool(args.inputs) and not args.out and hasattr(args, "out_dir")


def run_batch_file(
    args: argparse.Namespace,
    cfg: asm_config.MergerConfig,
    options: MergeOptions,
) -> int:
    """Run every item of a batch JSON file."""
    items = asm_batch.load_batch_file(args.batch)
    report = asm_batch.run_batch(
        items,
        options,
        cfg.batch.out_dir,
        show_progress=cfg.batch.progress,
    )
    return 0 if report.ok else 1


def run_grouped(
    args: argparse.Namespace,
    cfg: asm_config.MergerConfig,
    options: MergeOptions,
) -> int:
    """Group positional inputs into merges and run them as a batch."""
    groups = asm_batch.group_files(
        args.inputs,
        options.layout.slot_count,
        cfg.batch.grouping,
    )
    if not groups:
        logger.error(
            "No complete group of %d image(s) found among %d input(s)",
            options.layout.slot_count,
            len(args.inputs),
        )
        return 1
    jobs = asm_batch.jobs_from_groups(groups, cfg.batch.format)
    report = asm_batch.run_batch(
        jobs,
        options,
        cfg.batch.out_dir,
        show_progress=cfg.batch.progress,
    )
    return 0 if report.ok else 1


def run_single(args: argparse.Namespace, options: MergeOptions) -> int:
    """Merge the positional inputs into ``--out``."""
    result = asm_main.merge_files(args.inputs, Path(args.out), options)
    logger.info("Merged: %dx%d -> %s", result.width, result.height, args.out)
    return 0


def run_from_args(args: argparse.Namespace) -> int:
    """Dispatch to batch, grouped or single merge and return the status."""
    base_cfg: asm_config.MergerConfig | None = None
    if args.config:
        base_cfg = asm_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0
    elif args.validate_config_only:
        logger.error("--validate-config-only requires --config")
        return 1

    cfg = asm_config.build_config_from_cli(vars(args), base_config=base_cfg)
    options = cfg.to_merge_options()
    log_parameters(cfg)

    if args.batch:
        return run_batch_file(args, cfg, options)
    if getattr(args, "group", None) and args.out:
        logger.error(
            "--group writes one file per group; use --out-dir, not --out",
        )
        return 1
    if _wants_grouping(args):
        return run_grouped(args, cfg, options)
    if not args.inputs or not args.out:
        logger.error(
            "Input images and --out are required "
            "(or use --batch, or --group with --out-dir)",
        )
        return 1
    return run_single(args, options)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface and return the exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)
    arg_parser = build_arg_parser()
    if not argv:
        arg_parser.print_help()
        return 0
    args = arg_parser.parse_args(argv)
    set_verbosity(verbose=args.verbose)

    try:
        return run_from_args(args)
    except (MergerError, OSError, ValueError) as exc:
        logger.error("Error: %s", exc)  # noqa: TRY400
        return 1


def run() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
