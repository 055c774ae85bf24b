"""
Connectivity-constrained background removal.

The background color is taken from the top-left pixel. Starting from the
four image corners, every pixel reachable through an unbroken 4-connected
chain of matching pixels is made transparent. Same-colored regions with no
path to a corner (enclosed holes) are left untouched.
"""

from typing import List

from BE_Libs.constants import ALGORITHM_FLOOD_FILL, ALPHA_CHANNEL, CHANNELS
from BE_Libs.RasterLib.color_matcher import match_mask
from BE_Libs.RasterLib.raster import Raster
from BE_Libs.RemovalLib.base import Remover


class FloodFillRemover(Remover):
    """Flood fill from the corners against the top-left reference color."""

    ALGORITHM = ALGORITHM_FLOOD_FILL

    def clear_background(self, raster: Raster, tolerance: float) -> int:
        width, height = raster.width, raster.height
        pixels = raster.array()

        reference = raster.get_pixel(0, 0)
        matches = match_mask(pixels, reference, tolerance).ravel().tolist()
        visited = bytearray(width * height)

        # LIFO stack of flat indices; duplicates are filtered when popped
        pending: List[int] = [y * width + x for x, y in raster.corners()]
        cleared: List[int] = []

        while pending:
            index = pending.pop()
            if visited[index]:
                continue
            visited[index] = 1

            if not matches[index]:
                continue

            cleared.append(index)
            x, y = index % width, index // width
            if x > 0:
                pending.append(index - 1)
            if x < width - 1:
                pending.append(index + 1)
            if y > 0:
                pending.append(index - width)
            if y < height - 1:
                pending.append(index + width)

        if cleared:
            pixels.reshape(-1, CHANNELS)[cleared, ALPHA_CHANNEL] = 0
        return len(cleared)


def remove_flood_fill(raster: Raster, tolerance: float, smoothing: float = 0) -> int:
    """
    Run flood fill removal on a raster in place.

    Args:
        raster: Raster to modify
        tolerance: Match tolerance 0-100
        smoothing: Feathering strength 0-10 applied afterwards

    Returns:
        Number of pixels made transparent (before feathering)
    """
    return FloodFillRemover().run(raster, tolerance, smoothing)
