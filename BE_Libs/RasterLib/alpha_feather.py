"""
Alpha-channel feathering.

Softens hard cutout edges with an iterated 3x3 box blur that only touches
the alpha channel. Each pass reads neighbours from a snapshot of the
previous pass and writes into the live buffer, so the blur spreads by one
pixel per pass. The outermost 1-pixel frame is never written.

Example:
    >>> raster = Raster.from_image(Image.open("cutout.png"))
    >>> feather_alpha(raster, strength=4)   # 2 passes
"""

import logging
import math

import numpy as np

from BE_Libs.RasterLib.raster import Raster

logger = logging.getLogger(__name__)


def feather_passes(strength: float) -> int:
    """Number of blur passes for a 0-10 strength (0-5 passes)."""
    if strength <= 0:
        return 0
    return math.ceil(strength / 2)


def feather_alpha(raster: Raster, strength: float) -> None:
    """
    Blur the alpha channel of a raster in place.

    Args:
        raster: Raster to modify
        strength: Smoothing strength 0-10; <= 0 leaves the raster untouched

    Color channels are never modified. Rasters narrower or shorter than
    3 pixels have no interior and are left as is.
    """
    passes = feather_passes(strength)
    if passes == 0 or raster.width < 3 or raster.height < 3:
        return

    alpha = raster.array()[:, :, 3]

    for _ in range(passes):
        source = alpha.astype(np.uint16)

        # Sum of the 3x3 neighbourhood for every interior pixel
        total = np.zeros((raster.height - 2, raster.width - 2), dtype=np.uint16)
        for dy in range(3):
            for dx in range(3):
                total += source[dy:dy + raster.height - 2, dx:dx + raster.width - 2]

        alpha[1:-1, 1:-1] = np.rint(total / 9.0).astype(np.uint8)

    logger.debug(f"Feathered alpha of {raster.width}x{raster.height} raster, {passes} passes")
