"""
SessionLib - Editing session, settings and undo history

This module provides the session object that owns the layer pair and the
two-tier undo history.
"""

from BE_Libs.SessionLib.editor_settings import EditorSettings
from BE_Libs.SessionLib.history_manager import HistoryManager, SnapshotStack, UndoResult
from BE_Libs.SessionLib.editor_session import (
    EditorSession,
    StrokeSession,
    OverrideRequest,
    OverrideResult,
    to_raster,
)

__all__ = [
    "EditorSettings",
    "HistoryManager",
    "SnapshotStack",
    "UndoResult",
    "EditorSession",
    "StrokeSession",
    "OverrideRequest",
    "OverrideResult",
    "to_raster",
]
