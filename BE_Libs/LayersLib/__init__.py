"""
LayersLib - Layer compositing and manual editing

This module provides the base/mask compositor and the brush operations
used to build up and commit the mask.
"""

from BE_Libs.LayersLib.layer_compositor import LayerCompositor
from BE_Libs.LayersLib.manual_editor import (
    circle_mask,
    erase_circle,
    paint_circle,
    apply_mask,
)

__all__ = [
    "LayerCompositor",
    "circle_mask",
    "erase_circle",
    "paint_circle",
    "apply_mask",
]
