"""
Constants used internally by the Art Split Merger.

These are implementation-level limits that should not be overridden
via config files or CLI arguments.
"""

# Encoder quality range shared by JPEG and WebP
QUALITY_MIN = 1
QUALITY_MAX = 100

# Accepted input formats
VALID_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp"})
MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MB
MAX_DIMENSION = 20000
LARGE_IMAGE_DIMENSION = 8000  # warn above this, still accepted

# Transform limits
ADJUSTMENT_MIN = -100
ADJUSTMENT_MAX = 100
QUARTER_TURN = 90
FULL_TURN = 360
MIN_CROP_FRACTION = 0.1

# Contrast pivot (mid-gray on the 0..255 scale)
MID_GRAY = 127.5

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_BLACK = (0, 0, 0)
