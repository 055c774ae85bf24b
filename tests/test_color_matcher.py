"""
Tests for tolerance-based color matching.

Tests cover:
- Threshold boundaries
- Symmetry and monotonicity in tolerance
- Alpha being ignored
- Agreement between scalar and vectorized matching
"""

import itertools

import numpy as np
import pytest

from BE_Libs.RasterLib.color_matcher import colors_match, match_mask, tolerance_threshold


class TestColorsMatch:
    """Tests for colors_match."""

    def test_identical_colors_match(self):
        assert colors_match((10, 20, 30), (10, 20, 30), 1)

    def test_zero_tolerance_never_matches(self):
        assert not colors_match((10, 20, 30), (10, 20, 30), 0)

    def test_threshold_is_strict(self):
        # tolerance 10 -> threshold 76.5
        assert colors_match((0, 0, 0), (76, 0, 0), 10)
        assert not colors_match((0, 0, 0), (77, 0, 0), 10)

    def test_channel_differences_are_summed(self):
        # 30 + 30 + 30 = 90 >= 76.5
        assert not colors_match((0, 0, 0), (30, 30, 30), 10)
        # 25 + 25 + 25 = 75 < 76.5
        assert colors_match((0, 0, 0), (25, 25, 25), 10)

    def test_opposite_colors_never_match(self):
        assert not colors_match((0, 0, 0), (255, 255, 255), 100)

    def test_alpha_is_ignored(self):
        assert colors_match((5, 5, 5, 0), (5, 5, 5, 255), 1)

    def test_threshold_scale(self):
        assert tolerance_threshold(100) == pytest.approx(765.0)
        assert tolerance_threshold(0) == 0

    @pytest.mark.parametrize("tolerance", [0, 1, 5, 10, 15, 33.3, 50, 100])
    def test_symmetry(self, sample_rgb_colors, tolerance):
        for c1, c2 in itertools.product(sample_rgb_colors, repeat=2):
            assert colors_match(c1, c2, tolerance) == colors_match(c2, c1, tolerance)

    def test_monotonic_in_tolerance(self, sample_rgb_colors):
        tolerances = [0, 1, 2, 5, 10, 20, 40, 80, 100]
        for c1, c2 in itertools.product(sample_rgb_colors, repeat=2):
            matched = False
            for tolerance in tolerances:
                result = colors_match(c1, c2, tolerance)
                if matched:
                    assert result, f"{c1} vs {c2} stopped matching at {tolerance}"
                matched = matched or result


class TestMatchMask:
    """Tests for the vectorized match_mask."""

    def test_shape_and_dtype(self):
        pixels = np.zeros((3, 5, 4), dtype=np.uint8)
        mask = match_mask(pixels, (0, 0, 0), 1)

        assert mask.shape == (3, 5)
        assert mask.dtype == bool
        assert mask.all()

    def test_accepts_rgb_arrays(self):
        pixels = np.full((2, 2, 3), 200, dtype=np.uint8)

        assert not match_mask(pixels, (0, 0, 0, 255), 10).any()

    @pytest.mark.parametrize("tolerance", [1, 7, 15, 40])
    def test_agrees_with_colors_match(self, tolerance):
        rng = np.random.RandomState(1234)
        pixels = rng.randint(0, 256, size=(12, 9, 4)).astype(np.uint8)
        reference = (128, 64, 200)

        mask = match_mask(pixels, reference, tolerance)

        for y in range(pixels.shape[0]):
            for x in range(pixels.shape[1]):
                expected = colors_match(tuple(int(v) for v in pixels[y, x]), reference, tolerance)
                assert mask[y, x] == expected
