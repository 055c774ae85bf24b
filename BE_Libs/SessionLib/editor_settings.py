"""
Tunable parameters of an editing session.

The engine itself does not validate these values; callers that take them
from user input should go through EditorSettings.clamped() first.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from BE_Libs.constants import (
    DEFAULT_ALGORITHM,
    DEFAULT_BRUSH_RADIUS,
    DEFAULT_PREVIEW_MODE,
    DEFAULT_SMOOTHING,
    DEFAULT_TOLERANCE,
    DEFAULT_TOOL_MODE,
    MAX_SMOOTHING,
    MAX_TOLERANCE,
    MIN_BRUSH_RADIUS,
    MIN_SMOOTHING,
    MIN_TOLERANCE,
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class EditorSettings:
    """Configuration for an editing session.

    Attributes:
        algorithm: Removal algorithm ('FLOOD_FILL' or 'BORDER_MODEL')
        tolerance: Color match tolerance (1-100)
        smoothing: Alpha feathering strength (0-10)
        brush_radius: Brush radius in source-image pixels (>= 1)
        tool_mode: Mask brush mode ('ADD' or 'SUBTRACT')
        preview_mode: Display mode ('EDIT' or 'PREVIEW')
        two_layer: Paint into the mask layer (True) or erase the base
                   directly (False, single-layer mode)
    """
    algorithm: str = DEFAULT_ALGORITHM
    tolerance: float = DEFAULT_TOLERANCE
    smoothing: float = DEFAULT_SMOOTHING
    brush_radius: int = DEFAULT_BRUSH_RADIUS
    tool_mode: str = DEFAULT_TOOL_MODE
    preview_mode: str = DEFAULT_PREVIEW_MODE
    two_layer: bool = True

    def clamped(self) -> "EditorSettings":
        """Copy with every numeric parameter clamped to its documented range."""
        return replace(
            self,
            tolerance=_clamp(self.tolerance, MIN_TOLERANCE, MAX_TOLERANCE),
            smoothing=_clamp(self.smoothing, MIN_SMOOTHING, MAX_SMOOTHING),
            brush_radius=max(MIN_BRUSH_RADIUS, int(self.brush_radius)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)
