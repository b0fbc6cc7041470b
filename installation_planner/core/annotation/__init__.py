"""
Core annotation module - UI-agnostic annotation logic.

This module provides the marker/room engine and the material tally that
can be used with any UI framework (Tkinter, Web, CLI, etc).
"""

from .errors import (
    AnnotationError,
    GeometryError,
    PersistenceBusyError,
    PersistenceError,
    ToolStateError,
    ValidationError,
)
from .events import AnnotationEvent, EventEmitter, EventType
from .geometry import DisplayRect, Rect, normalize_rect, to_image_space
from .session import AnnotationSession, EditorContext
from .state import (
    Legend,
    Marker,
    ProjectSnapshot,
    Room,
    ToolMode,
    TYPE_CODES,
    TYPE_COLORS,
    UNASSIGNED,
)
from .stores import HIT_THRESHOLD, MarkerStore, RoomStore
from .tally import MaterialReport, build_material_report, compute_tally

__all__ = [
    "AnnotationSession",
    "EditorContext",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "AnnotationError",
    "GeometryError",
    "ValidationError",
    "ToolStateError",
    "PersistenceError",
    "PersistenceBusyError",
    "DisplayRect",
    "Rect",
    "normalize_rect",
    "to_image_space",
    "Legend",
    "Marker",
    "Room",
    "ProjectSnapshot",
    "ToolMode",
    "TYPE_CODES",
    "TYPE_COLORS",
    "UNASSIGNED",
    "HIT_THRESHOLD",
    "MarkerStore",
    "RoomStore",
    "MaterialReport",
    "build_material_report",
    "compute_tally",
]
