from __future__ import annotations

import abc
import logging
from typing import ClassVar

from BE_Libs.RasterLib.alpha_feather import feather_alpha
from BE_Libs.RasterLib.raster import Raster

logger = logging.getLogger(__name__)


class Remover(abc.ABC):
    """
    Abstract base class for automatic background removers.

    Subclasses decide which pixels belong to the background and clear
    their alpha; feathering is shared.
    """

    ALGORITHM: ClassVar[str]

    @abc.abstractmethod
    def clear_background(self, raster: Raster, tolerance: float) -> int:
        """Set background alpha to 0 in place and return the cleared pixel count."""
        ...

    def run(self, raster: Raster, tolerance: float, smoothing: float = 0) -> int:
        cleared = self.clear_background(raster, tolerance)
        logger.debug(
            f"{self.ALGORITHM}: cleared {cleared} of {raster.width * raster.height} pixels "
            f"(tolerance={tolerance})"
        )
        if smoothing > 0:
            feather_alpha(raster, smoothing)
        return cleared
