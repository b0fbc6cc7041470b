"""
Event system for the annotation workflow.

Provides a decoupled way for the annotation core to notify render and UI
components about state changes without depending on a specific toolkit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur during annotation."""

    # Image events
    IMAGE_LOADED = "image_loaded"

    # Tool events
    TOOL_CHANGED = "tool_changed"

    # Room events
    ROOM_DRAFT_STARTED = "room_draft_started"
    ROOM_PREVIEW_UPDATED = "room_preview_updated"
    ROOM_NAME_REQUESTED = "room_name_requested"
    ROOM_NAME_REJECTED = "room_name_rejected"
    ROOM_ADDED = "room_added"
    ROOM_RENAMED = "room_renamed"
    ROOM_REMOVED = "room_removed"

    # Marker events
    MARKER_ADDED = "marker_added"
    MARKER_REMOVED = "marker_removed"

    # Legend events
    LEGEND_CHANGED = "legend_changed"

    # Project events
    PROJECT_LOADED = "project_loaded"
    PROJECT_SAVED = "project_saved"
    PROJECT_DELETED = "project_deleted"
    PERSISTENCE_FAILED = "persistence_failed"


@dataclass
class AnnotationEvent:
    """Event that occurs during annotation."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}
        self._any_listeners: List[Callable] = []

    def on(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def on_any(self, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to every event type."""
        self._any_listeners.append(callback)

    def off(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: AnnotationEvent):
        """Emit an event to all subscribers."""
        callbacks = list(self._listeners.get(event.event_type, []))
        callbacks.extend(self._any_listeners)
        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                # Log but don't crash on listener errors
                logger.exception(f"Error in listener for {event.event_type.value}")

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
        self._any_listeners.clear()
