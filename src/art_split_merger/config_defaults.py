"""Shared default values for user-facing configuration settings."""
from art_split_merger.type_defs import (
    GroupingMode,
    LayoutCode,
    OutputFormat,
    ResizeMode,
)

# Layout
DEFAULT_LAYOUT: LayoutCode = "2"
DEFAULT_GAP = 0
DEFAULT_GRID_ROWS = 2
DEFAULT_GRID_COLS = 3
# Fixed canvas used by the mixed, 2x2 and custom grid layouts
DEFAULT_CANVAS_SIZE = 3000

# Render
DEFAULT_BG_COLOR = "#000000"
DEFAULT_MODE: ResizeMode = "fit"
DEFAULT_QUALITY = 92

# Batch
DEFAULT_OUT_DIR = "."
DEFAULT_GROUPING: GroupingMode = "sequential"
DEFAULT_GROUP_FORMAT: OutputFormat = "png"
DEFAULT_SHOW_PROGRESS = True
MERGED_SUFFIX = "_merged"
