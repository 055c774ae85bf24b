"""
Connectivity-free background removal.

Every pixel is compared against the colors of the four image corners and
made transparent if it matches any of them. Unlike flood fill, enclosed
regions of the background color are cleared too.
"""

import numpy as np

from BE_Libs.constants import ALGORITHM_BORDER_MODEL
from BE_Libs.RasterLib.color_matcher import match_mask
from BE_Libs.RasterLib.raster import Raster
from BE_Libs.RemovalLib.base import Remover


class BorderModelRemover(Remover):
    """Global removal against the four corner reference colors."""

    ALGORITHM = ALGORITHM_BORDER_MODEL

    def clear_background(self, raster: Raster, tolerance: float) -> int:
        pixels = raster.array()
        references = [raster.get_pixel(x, y) for x, y in raster.corners()]

        background = np.zeros((raster.height, raster.width), dtype=bool)
        for reference in references:
            background |= match_mask(pixels, reference, tolerance)

        pixels[background, 3] = 0
        return int(background.sum())


def remove_border_model(raster: Raster, tolerance: float, smoothing: float = 0) -> int:
    """
    Run border model removal on a raster in place.

    Returns:
        Number of pixels made transparent (before feathering)
    """
    return BorderModelRemover().run(raster, tolerance, smoothing)
