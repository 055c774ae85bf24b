"""
RasterLib - Pixel buffer model and per-pixel primitives

This module provides the Raster data model, tolerance-based color
matching and alpha feathering used by the removers and editors.
"""

from BE_Libs.RasterLib.raster import Raster, RgbaColor, RgbColor
from BE_Libs.RasterLib.color_matcher import (
    tolerance_threshold,
    colors_match,
    match_mask,
)
from BE_Libs.RasterLib.alpha_feather import feather_alpha, feather_passes

__all__ = [
    "Raster",
    "RgbaColor",
    "RgbColor",
    "tolerance_threshold",
    "colors_match",
    "match_mask",
    "feather_alpha",
    "feather_passes",
]
