"""
Constants and configuration values for BG Eraser.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Raster layout
CHANNELS = 4
ALPHA_CHANNEL = 3
TRANSPARENT = (0, 0, 0, 0)

# Color matching: tolerance is a percentage mapped onto the 0-765 byte-sum range
TOLERANCE_SCALE = 3 * 2.55
MIN_TOLERANCE = 1
MAX_TOLERANCE = 100
DEFAULT_TOLERANCE = 15

# Alpha feathering
MIN_SMOOTHING = 0
MAX_SMOOTHING = 10
DEFAULT_SMOOTHING = 0

# Removal algorithms
ALGORITHM_FLOOD_FILL = "FLOOD_FILL"
ALGORITHM_BORDER_MODEL = "BORDER_MODEL"
DEFAULT_ALGORITHM = ALGORITHM_FLOOD_FILL

# Manual editing
TOOL_ADD = "ADD"
TOOL_SUBTRACT = "SUBTRACT"
TOOL_MODES = (TOOL_ADD, TOOL_SUBTRACT)
DEFAULT_TOOL_MODE = TOOL_ADD
MIN_BRUSH_RADIUS = 1
DEFAULT_BRUSH_RADIUS = 30
MARKER_COLOR = (255, 0, 0, 255)

# Display modes
PREVIEW_EDIT = "EDIT"
PREVIEW_RESULT = "PREVIEW"
PREVIEW_MODES = (PREVIEW_EDIT, PREVIEW_RESULT)
DEFAULT_PREVIEW_MODE = PREVIEW_EDIT
EDIT_OVERLAY_OPACITY = 0.6

# History
BASE_HISTORY_LIMIT = 30
BASE_HISTORY_FLOOR = 1
MASK_HISTORY_LIMIT = 20
MASK_HISTORY_FLOOR = 0

# Undo results
LAYER_BASE = "base"
LAYER_MASK = "mask"

# Export
DEFAULT_EXPORT_NAME = "processed_image"
DEFAULT_OUTPUT_FORMAT = "PNG"
