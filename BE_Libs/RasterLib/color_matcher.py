"""
Tolerance-based color matching.

Two colors match when the sum of their absolute R, G and B differences is
below the tolerance scaled onto the 0-765 byte-sum range. Alpha never takes
part in the comparison.

Functions:
    tolerance_threshold: Convert a 0-100 tolerance into a byte-sum threshold
    colors_match: Compare two single colors
    match_mask: Compare every pixel of an array against one reference color
"""

from typing import Sequence

import numpy as np

from BE_Libs.constants import TOLERANCE_SCALE


def tolerance_threshold(tolerance: float) -> float:
    """Byte-sum difference a color pair must stay strictly below to match."""
    return tolerance * TOLERANCE_SCALE


def colors_match(c1: Sequence[int], c2: Sequence[int], tolerance: float) -> bool:
    """
    Check whether two colors match within a tolerance.

    Args:
        c1: First color (R, G, B[, A]); alpha is ignored
        c2: Second color (R, G, B[, A]); alpha is ignored
        tolerance: Percentage 0-100. Not validated, callers clamp.

    Returns:
        True if |R1-R2| + |G1-G2| + |B1-B2| < tolerance * 3 * 2.55
    """
    diff = abs(c1[0] - c2[0]) + abs(c1[1] - c2[1]) + abs(c1[2] - c2[2])
    return diff < tolerance_threshold(tolerance)


def match_mask(pixels: np.ndarray, reference: Sequence[int], tolerance: float) -> np.ndarray:
    """
    Vectorized colors_match over an image array.

    Args:
        pixels: (H, W, 3) or (H, W, 4) uint8 array
        reference: Reference color (R, G, B[, A])
        tolerance: Percentage 0-100

    Returns:
        (H, W) boolean array, True where the pixel matches the reference
    """
    rgb = pixels[:, :, :3].astype(np.int32)
    ref = np.asarray(reference[:3], dtype=np.int32)
    diff = np.abs(rgb - ref).sum(axis=2)
    return diff < tolerance_threshold(tolerance)
