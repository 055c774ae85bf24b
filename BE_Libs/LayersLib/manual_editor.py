"""
Brush-based manual editing.

Provides the circular brush footprint and the operations that stamp it into
a raster:

- erase_circle: direct eraser for single-layer mode, clears base alpha
- paint_circle: mask painter for two-layer mode (ADD marks / SUBTRACT marks)
- apply_mask: commit pending mask marks into the base

Coordinates are in source-image pixels and may be fractional or lie
outside the raster; anything outside is clipped.
"""

from typing import Optional

import numpy as np

from BE_Libs.constants import MARKER_COLOR, TOOL_ADD, TOOL_MODES, TOOL_SUBTRACT
from BE_Libs.LayersLib.layer_compositor import LayerCompositor
from BE_Libs.RasterLib.raster import Raster, RgbaColor


def circle_mask(width: int, height: int, x: float, y: float, radius: float) -> np.ndarray:
    """
    Boolean footprint of a filled circle.

    A pixel (px, py) is covered when its center (px + 0.5, py + 0.5) lies
    within radius of (x, y).

    Returns:
        (height, width) boolean array
    """
    rows, cols = np.ogrid[:height, :width]
    dist_sq = (cols + 0.5 - x) ** 2 + (rows + 0.5 - y) ** 2
    return dist_sq <= radius * radius


def erase_circle(raster: Raster, x: float, y: float, radius: float) -> int:
    """
    Clear alpha inside a circle (destination-out with an opaque brush).

    Returns:
        Number of pixels covered by the brush
    """
    footprint = circle_mask(raster.width, raster.height, x, y, radius)
    raster.array()[footprint, 3] = 0
    return int(footprint.sum())


def paint_circle(
    mask: Raster,
    x: float,
    y: float,
    radius: float,
    tool_mode: str = TOOL_ADD,
    color: Optional[RgbaColor] = None,
) -> int:
    """
    Paint a circle into the mask raster.

    Args:
        mask: Mask raster to modify
        x, y: Brush center
        radius: Brush radius in pixels
        tool_mode: TOOL_ADD draws opaque marker color (source-over),
                   TOOL_SUBTRACT clears alpha (destination-out)
        color: Opaque marker color for TOOL_ADD (default MARKER_COLOR)

    Returns:
        Number of pixels covered by the brush

    Raises:
        ValueError: If tool_mode is unknown or color is not opaque
    """
    if tool_mode not in TOOL_MODES:
        raise ValueError(f"Unknown tool mode: {tool_mode}. Valid modes: {', '.join(TOOL_MODES)}")
    if color is not None and color[3] != 255:
        raise ValueError(f"Marker color must be opaque, got alpha {color[3]}")

    footprint = circle_mask(mask.width, mask.height, x, y, radius)
    pixels = mask.array()

    if tool_mode == TOOL_SUBTRACT:
        pixels[footprint, 3] = 0
    else:
        pixels[footprint] = color if color is not None else MARKER_COLOR

    return int(footprint.sum())


def apply_mask(base: Raster, mask: Raster) -> Raster:
    """Merge mask into base via destination-out; returns a new raster."""
    return LayerCompositor.destination_out(base, mask)
