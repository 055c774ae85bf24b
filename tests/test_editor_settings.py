"""
Unit tests for EditorSettings.
"""

import unittest

from BE_Libs.constants import (
    DEFAULT_BRUSH_RADIUS,
    DEFAULT_TOLERANCE,
    PREVIEW_EDIT,
    TOOL_ADD,
)
from BE_Libs.SessionLib.editor_settings import EditorSettings


class TestEditorSettings(unittest.TestCase):
    """Tests for defaults, clamping and dict conversion."""

    def test_defaults(self):
        settings = EditorSettings()

        self.assertEqual(settings.algorithm, "FLOOD_FILL")
        self.assertEqual(settings.tolerance, DEFAULT_TOLERANCE)
        self.assertEqual(settings.smoothing, 0)
        self.assertEqual(settings.brush_radius, DEFAULT_BRUSH_RADIUS)
        self.assertEqual(settings.tool_mode, TOOL_ADD)
        self.assertEqual(settings.preview_mode, PREVIEW_EDIT)
        self.assertTrue(settings.two_layer)

    def test_clamped_limits_ranges(self):
        settings = EditorSettings(tolerance=250, smoothing=-4, brush_radius=0)

        clamped = settings.clamped()

        self.assertEqual(clamped.tolerance, 100)
        self.assertEqual(clamped.smoothing, 0)
        self.assertEqual(clamped.brush_radius, 1)

    def test_clamped_lower_tolerance(self):
        self.assertEqual(EditorSettings(tolerance=0).clamped().tolerance, 1)

    def test_clamped_leaves_original(self):
        settings = EditorSettings(smoothing=30)

        settings.clamped()

        self.assertEqual(settings.smoothing, 30)

    def test_dict_round_trip(self):
        settings = EditorSettings(algorithm="BORDER_MODEL", tolerance=42, two_layer=False)

        restored = EditorSettings.from_dict(settings.to_dict())

        self.assertEqual(restored, settings)

    def test_from_dict_ignores_unknown_keys(self):
        restored = EditorSettings.from_dict({"tolerance": 5, "zoom": 3})

        self.assertEqual(restored.tolerance, 5)


if __name__ == "__main__":
    unittest.main()
