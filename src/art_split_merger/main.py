"""Top-level orchestration for merging image files into one output."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING

import art_split_merger.image_io as asm_image_io
import art_split_merger.runtime as asm_runtime
from art_split_merger.layout import compose, require_images
from art_split_merger.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from art_split_merger.layout import MergeOptions, MergeResult, Transform
    from art_split_merger.type_defs import OutputFormat


def merge_files(
    input_paths: Sequence[str | Path],
    out_path: str | Path,
    options: MergeOptions,
    transforms: Sequence[Transform | None] = (),
    fmt: OutputFormat | None = None,
) -> MergeResult:
    """
    Merge image files into ``out_path`` and return the composed result.

    Cheap checks run first: the image count, then path existence, file
    format and size. Images are only decoded once the geometry is known,
    and nothing is written unless encoding succeeded.

    Args:
        input_paths: Image paths in slot order
        out_path: Destination file; its extension picks the format
            unless ``fmt`` is given
        options: Layout and rendering options
        transforms: Optional per-slot transforms, index-aligned
        fmt: Explicit output format overriding the extension

    Raises:
        InputNotFound: If an input path does not exist
        InsufficientImages: If the layout needs more images
        EncodeFailure: If the encoder produced no data

    """
    used = list(input_paths[:options.layout.slot_count])
    require_images(options.layout, len(used))
    asm_runtime.validate_quality(options.quality)
    asm_runtime.validate_input_paths(used)
    for path in used:
        asm_image_io.validate_image_file(path)

    with ExitStack() as stack:
        images = [
            stack.enter_context(asm_image_io.open_image(path))
            for path in used
        ]
        result = compose(images, options, transforms)

    out_format = fmt or asm_image_io.resolve_output_format(out_path)
    data = result.encode(out_format, options.quality)
    saved = asm_image_io.save_encoded(data, out_path)
    logger.info(
        "Saved %s (%dx%d, %s)",
        saved,
        result.width,
        result.height,
        out_format,
    )
    return result
