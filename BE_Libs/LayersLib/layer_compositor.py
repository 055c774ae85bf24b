"""
Base + Mask Layer Compositor.

Merges the base raster (processed image) with the mask raster (pending
manual marks) into the frame shown to the user, in one of two modes:

- PREVIEW: the mask punches holes into the base (destination-out), showing
  what the image will look like once the marks are applied.
- EDIT: the mask is drawn over the base as a semi-transparent overlay
  (source-over at a fixed opacity) so the marks stay visible while painting.

Neither mode mutates its inputs.

Example:
    >>> frame = LayerCompositor.render(base, mask, PREVIEW_RESULT)
    >>> frame.to_image().show()
"""

import numpy as np
from PIL import Image

from BE_Libs.constants import (
    EDIT_OVERLAY_OPACITY,
    PREVIEW_EDIT,
    PREVIEW_MODES,
    PREVIEW_RESULT,
)
from BE_Libs.RasterLib.raster import Raster


class LayerCompositor:
    """Handles base/mask composition."""

    @staticmethod
    def render(base: Raster, mask: Raster, mode: str = PREVIEW_EDIT) -> Raster:
        """
        Composite the mask onto a copy of the base.

        Args:
            base: Processed image raster
            mask: Manual marks raster, same size as base
            mode: PREVIEW_EDIT ("EDIT") or PREVIEW_RESULT ("PREVIEW")

        Returns:
            New Raster holding the composited frame

        Raises:
            ValueError: If mode is unknown or the rasters differ in size
        """
        if mode == PREVIEW_RESULT:
            return LayerCompositor.destination_out(base, mask)
        if mode == PREVIEW_EDIT:
            return LayerCompositor.source_over(base, mask, EDIT_OVERLAY_OPACITY)
        raise ValueError(f"Unknown preview mode: {mode}. Valid modes: {', '.join(PREVIEW_MODES)}")

    @staticmethod
    def destination_out(base: Raster, overlay: Raster) -> Raster:
        """
        Erase base alpha wherever the overlay is opaque.

        result.alpha = base.alpha * (1 - overlay.alpha / 255), rounded to
        the nearest integer. Color channels are copied from base unchanged.
        """
        LayerCompositor._check_sizes(base, overlay)

        result = base.copy()
        result_px = result.array()
        base_alpha = result_px[:, :, 3].astype(np.uint32)
        overlay_alpha = overlay.array()[:, :, 3].astype(np.uint32)

        keep = 255 - overlay_alpha
        result_px[:, :, 3] = np.rint(base_alpha * keep / 255.0).astype(np.uint8)
        return result

    @staticmethod
    def source_over(base: Raster, overlay: Raster, opacity: float = 1.0) -> Raster:
        """
        Standard alpha compositing of overlay onto base.

        Args:
            base: Bottom raster
            overlay: Top raster, same size
            opacity: Multiplier 0.0-1.0 applied to the overlay alpha first

        Returns:
            New composited Raster
        """
        LayerCompositor._check_sizes(base, overlay)

        top = overlay
        if opacity < 1.0:
            top = LayerCompositor._apply_opacity(overlay, opacity)

        composed = Image.alpha_composite(base.to_image(), top.to_image())
        return Raster.from_image(composed)

    @staticmethod
    def _apply_opacity(raster: Raster, opacity: float) -> Raster:
        """Copy of raster with its alpha scaled by opacity (0.0-1.0)."""
        scaled = raster.copy()
        px = scaled.array()
        px[:, :, 3] = np.rint(px[:, :, 3] * opacity).astype(np.uint8)
        return scaled

    @staticmethod
    def _check_sizes(base: Raster, overlay: Raster) -> None:
        if base.size != overlay.size:
            raise ValueError(
                f"Layer size mismatch: base is {base.width}x{base.height}, "
                f"overlay is {overlay.width}x{overlay.height}"
            )
