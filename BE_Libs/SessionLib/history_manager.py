"""
Two-tier undo history.

The base layer and the mask layer keep separate snapshot stacks:

- base_history: committed states (image load, automatic removal, override,
  Apply). The top entry is always the current base; it never drops below
  one entry and holds at most 30.
- mask_history: the mask as it was before each stroke session. Empty when
  no manual edits are pending; holds at most 20.

An undo always rolls back pending mask edits before it touches a committed
base state.

Classes:
    SnapshotStack: Bounded stack of raster copies with a floor
    UndoResult: What an undo request changed
    HistoryManager: Owns both stacks and implements the undo rule
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from BE_Libs.constants import (
    BASE_HISTORY_FLOOR,
    BASE_HISTORY_LIMIT,
    LAYER_BASE,
    LAYER_MASK,
    MASK_HISTORY_FLOOR,
    MASK_HISTORY_LIMIT,
)
from BE_Libs.RasterLib.raster import Raster

logger = logging.getLogger(__name__)


class SnapshotStack:
    """
    Bounded stack of immutable raster snapshots.

    Every pushed raster is copied, and overflow discards the oldest entry.
    """

    def __init__(self, capacity: int, floor: int = 0):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if not (0 <= floor <= capacity):
            raise ValueError(f"floor must be 0-{capacity}, got {floor}")
        self.capacity = capacity
        self.floor = floor
        self._entries: List[Raster] = []

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, raster: Raster) -> None:
        self._entries.append(raster.copy())
        if len(self._entries) > self.capacity:
            self._entries.pop(0)

    def pop(self) -> Optional[Raster]:
        """Remove and return the top entry, or None if that would break the floor."""
        if len(self._entries) <= self.floor:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[Raster]:
        """Copy of the top entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries[-1].copy()

    def clear(self) -> None:
        self._entries.clear()

    def reset(self, raster: Raster) -> None:
        """Drop every entry and start over from a single snapshot."""
        self._entries = [raster.copy()]


@dataclass
class UndoResult:
    """Outcome of an undo request.

    Attributes:
        layer: LAYER_MASK, LAYER_BASE, or None when nothing was undone
        raster: Restored raster for that layer (an independent copy)
        mask_pending: Whether mask snapshots remain after this undo
    """
    layer: Optional[str] = None
    raster: Optional[Raster] = None
    mask_pending: bool = False

    @property
    def changed(self) -> bool:
        return self.layer is not None


class HistoryManager:
    """Per-layer snapshot stacks with stroke- and operation-level undo."""

    def __init__(
        self,
        base_limit: int = BASE_HISTORY_LIMIT,
        mask_limit: int = MASK_HISTORY_LIMIT,
    ):
        self.base_history = SnapshotStack(base_limit, BASE_HISTORY_FLOOR)
        self.mask_history = SnapshotStack(mask_limit, MASK_HISTORY_FLOOR)

    def seed(self, base: Raster) -> None:
        """Start a fresh history for a newly loaded or replaced base."""
        self.base_history.reset(base)
        self.mask_history.clear()
        logger.debug(f"History seeded with {base.width}x{base.height} base")

    def record_base(self, base: Raster) -> None:
        """Push a committed base state."""
        self.base_history.push(base)

    def record_mask(self, mask: Raster) -> None:
        """Push the mask as it is before a stroke session modifies it."""
        self.mask_history.push(mask)

    def clear_mask(self) -> None:
        self.mask_history.clear()

    @property
    def has_pending_mask(self) -> bool:
        return len(self.mask_history) > 0

    def undo(self) -> UndoResult:
        """
        Undo the most recent change.

        Pending mask edits are undone first, one stroke per request. Only
        when no mask snapshot remains is the latest committed base state
        discarded. With a single base entry and no mask snapshots this is
        a no-op.
        """
        if self.has_pending_mask:
            restored = self.mask_history.pop()
            pending = self.has_pending_mask
            logger.debug(f"Undo mask stroke, {len(self.mask_history)} mask snapshots left")
            return UndoResult(layer=LAYER_MASK, raster=restored, mask_pending=pending)

        if len(self.base_history) > 1:
            self.base_history.pop()
            restored = self.base_history.peek()
            logger.debug(f"Undo base state, {len(self.base_history)} base snapshots left")
            return UndoResult(layer=LAYER_BASE, raster=restored, mask_pending=False)

        return UndoResult()
