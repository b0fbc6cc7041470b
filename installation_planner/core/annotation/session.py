"""
Annotation session management.

Core logic for placing markers and drawing rooms on a floor plan.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

import numpy as np

from .errors import GeometryError, ToolStateError, ValidationError
from .events import AnnotationEvent, EventEmitter, EventType
from .geometry import DisplayRect, Rect, normalize_rect, to_image_space
from .state import (
    Legend,
    Marker,
    ProjectSnapshot,
    Room,
    ToolMode,
    TYPE_CODES,
    validate_type_code,
)
from .stores import HIT_THRESHOLD, MarkerStore, RoomStore
from .tally import MaterialReport, Tally, build_material_report, compute_tally

logger = logging.getLogger(__name__)


@dataclass
class EditorContext:
    """
    Everything an editing session owns.

    Tool mode, the in-progress room draft and the store contents live here
    instead of in module globals.
    """

    markers: MarkerStore = field(default_factory=MarkerStore)
    rooms: Optional[RoomStore] = None
    legend: Legend = field(default_factory=Legend)
    mode: ToolMode = ToolMode.IDLE
    active_type: Optional[str] = None
    room_start: Optional[Tuple[float, float]] = None
    preview_rect: Optional[Rect] = None
    pending_rect: Optional[Rect] = None
    image: Optional[np.ndarray] = None
    image_blob: Optional[str] = None
    image_size: Optional[Tuple[int, int]] = None
    project_id: Optional[Any] = None

    def __post_init__(self):
        if self.rooms is None:
            self.rooms = RoomStore(self.markers)
        elif self.rooms.markers is None:
            self.rooms.markers = self.markers

    def reset_tool(self):
        self.mode = ToolMode.IDLE
        self.active_type = None
        self.room_start = None
        self.preview_rect = None
        self.pending_rect = None


class AnnotationSession:
    """
    Manages the state and logic of a floor-plan annotation session.

    This class handles:
    - Tool mode transitions (marker type, room drawing, delete)
    - Pointer events mapped to image-space
    - Marker placement with room assignment
    - Room creation, renaming and deletion cascade
    - Event emission for UI updates

    The session is UI-agnostic - it emits events that UI components
    can listen to, rather than directly manipulating UI elements.
    """

    def __init__(
        self,
        context: Optional[EditorContext] = None,
        hit_threshold: float = HIT_THRESHOLD,
    ):
        """
        Initialize annotation session.

        Args:
            context: Editor context to operate on, a fresh one when omitted
            hit_threshold: Delete-tool hit distance in image pixels
        """
        self.context = context or EditorContext()
        self.hit_threshold = float(hit_threshold)

        # Event emitter for UI notifications
        self.events = EventEmitter()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def mode(self) -> ToolMode:
        return self.context.mode

    @property
    def active_type(self) -> Optional[str]:
        return self.context.active_type

    @property
    def markers(self) -> MarkerStore:
        return self.context.markers

    @property
    def rooms(self) -> RoomStore:
        return self.context.rooms

    @property
    def legend(self) -> Legend:
        return self.context.legend

    @property
    def preview_rect(self) -> Optional[Rect]:
        return self.context.preview_rect

    @property
    def pending_rect(self) -> Optional[Rect]:
        return self.context.pending_rect

    @property
    def awaiting_second_point(self) -> bool:
        return (
            self.context.mode == ToolMode.ROOM_DRAWING
            and self.context.room_start is not None
        )

    @property
    def has_image(self) -> bool:
        return self.context.image_size is not None

    # ------------------------------------------------------------------
    # Image / project lifecycle
    # ------------------------------------------------------------------
    def load_image(self, image: np.ndarray, image_blob: Optional[str] = None):
        """
        Load a new floor plan. Clears all markers and rooms.

        Args:
            image: Decoded image as numpy array (H, W[, C])
            image_blob: Encoded form of the same image, stored with the project
        """
        height, width = self._image_size(image)
        ctx = self.context
        ctx.markers.clear()
        ctx.rooms.clear()
        ctx.reset_tool()
        ctx.image = image
        ctx.image_blob = image_blob
        ctx.image_size = (width, height)
        ctx.project_id = None

        self.events.emit(
            AnnotationEvent(EventType.IMAGE_LOADED, {"width": width, "height": height})
        )

    def load_project(self, snapshot: ProjectSnapshot, image: Optional[np.ndarray] = None):
        """
        Replace the session content with a value copy of a stored project.

        Args:
            snapshot: Project to open
            image: Decoded floor plan belonging to the snapshot
        """
        if image is not None:
            height, width = self._image_size(image)
        snapshot = snapshot.copy()

        markers = MarkerStore(snapshot.markers)
        ctx = self.context
        ctx.markers = markers
        ctx.rooms = RoomStore(markers, snapshot.rooms)
        ctx.legend = snapshot.legend
        ctx.reset_tool()
        ctx.project_id = snapshot.id
        ctx.image = image
        ctx.image_blob = snapshot.image
        ctx.image_size = (width, height) if image is not None else None

        logger.debug(f"Loaded project {snapshot!r}")
        self.events.emit(
            AnnotationEvent(
                EventType.PROJECT_LOADED,
                {"id": snapshot.id, "name": snapshot.name},
            )
        )

    def snapshot(self, name: str, image_blob: Optional[str] = None) -> ProjectSnapshot:
        """
        Independent copy of the current content, ready to be stored.

        The floor plan blob of the loaded image or project is used when
        ``image_blob`` is not given.
        """
        return ProjectSnapshot(
            name=name,
            image=image_blob if image_blob is not None else self.context.image_blob,
            markers=self.markers.all(),
            rooms=self.rooms.all(),
            legend=self.legend,
            id=self.context.project_id,
        ).copy()

    # ------------------------------------------------------------------
    # Tool selection
    # ------------------------------------------------------------------
    def select_marker_tool(self, type_code: str):
        """Select a marker type; selecting the active type again turns it off."""
        validate_type_code(type_code)
        self._ensure_not_naming()
        ctx = self.context
        if ctx.mode == ToolMode.TOOL_SELECTED and ctx.active_type == type_code:
            self.clear_tool()
            return
        ctx.reset_tool()
        ctx.mode = ToolMode.TOOL_SELECTED
        ctx.active_type = type_code
        self._emit_tool_changed()

    def select_room_tool(self):
        """Start drawing a room; no corner captured yet."""
        self._ensure_not_naming()
        self.context.reset_tool()
        self.context.mode = ToolMode.ROOM_DRAWING
        self._emit_tool_changed()

    def select_delete_tool(self):
        """Enter delete mode; selecting it again turns it off."""
        self._ensure_not_naming()
        if self.context.mode == ToolMode.DELETE:
            self.clear_tool()
            return
        self.context.reset_tool()
        self.context.mode = ToolMode.DELETE
        self._emit_tool_changed()

    def clear_tool(self):
        """Back to idle, discarding any room draft."""
        self._ensure_not_naming()
        self.context.reset_tool()
        self._emit_tool_changed()

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------
    def to_image_space(
        self, pointer_x: float, pointer_y: float, display_rect: DisplayRect
    ) -> Tuple[float, float]:
        if not self.has_image:
            raise GeometryError("No image loaded")
        width, height = self.context.image_size
        return to_image_space(pointer_x, pointer_y, display_rect, width, height)

    def pointer_down(
        self, pointer_x: float, pointer_y: float, display_rect: DisplayRect
    ) -> Optional[Any]:
        """Handle a click given in display coordinates."""
        x, y = self.to_image_space(pointer_x, pointer_y, display_rect)
        return self.click(x, y)

    def pointer_move(
        self, pointer_x: float, pointer_y: float, display_rect: DisplayRect
    ) -> Optional[Rect]:
        """Handle pointer movement given in display coordinates."""
        if not self.awaiting_second_point:
            return None
        x, y = self.to_image_space(pointer_x, pointer_y, display_rect)
        return self.move(x, y)

    def click(self, x: float, y: float) -> Optional[Any]:
        """
        Handle a click in image-space according to the current tool.

        Returns:
            The placed Marker, the removed Marker, the pending room Rect,
            or None when nothing happened
        """
        if not self.has_image:
            raise GeometryError("No image loaded")

        mode = self.context.mode
        if mode == ToolMode.DELETE:
            return self._delete_at(x, y)
        if mode == ToolMode.ROOM_DRAWING:
            return self._room_click(x, y)
        if mode == ToolMode.TOOL_SELECTED:
            return self._place_marker(x, y)
        return None

    def move(self, x: float, y: float) -> Optional[Rect]:
        """Update the live room preview while waiting for the second corner."""
        if not self.awaiting_second_point:
            return None
        sx, sy = self.context.room_start
        preview = normalize_rect(sx, sy, x, y)
        self.context.preview_rect = preview
        self.events.emit(
            AnnotationEvent(EventType.ROOM_PREVIEW_UPDATED, {"rect": preview.to_dict()})
        )
        return preview

    # ------------------------------------------------------------------
    # Room naming
    # ------------------------------------------------------------------
    def confirm_room_name(self, name: str) -> Room:
        """
        Create the pending room.

        Raises:
            ToolStateError: If no room is waiting for a name
            ValidationError: If the name is empty; the pending room is kept
        """
        ctx = self.context
        if ctx.mode != ToolMode.ROOM_NAMING or ctx.pending_rect is None:
            raise ToolStateError("No room is waiting for a name")
        try:
            room = ctx.rooms.add(ctx.pending_rect, name)
        except ValidationError as e:
            self.events.emit(
                AnnotationEvent(EventType.ROOM_NAME_REJECTED, {"error": str(e)})
            )
            raise
        ctx.reset_tool()
        self.events.emit(AnnotationEvent(EventType.ROOM_ADDED, {"room": room.to_dict()}))
        self._emit_tool_changed()
        return room

    def cancel_room_naming(self):
        """Discard the pending room."""
        if self.context.mode != ToolMode.ROOM_NAMING:
            return
        self.context.reset_tool()
        self._emit_tool_changed()

    # ------------------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------------------
    def delete_marker(self, marker_id: Any) -> Optional[Marker]:
        marker = self.markers.remove(marker_id)
        if marker is not None:
            self.events.emit(
                AnnotationEvent(EventType.MARKER_REMOVED, {"marker": marker.to_dict()})
            )
        return marker

    def delete_room(self, room_id: Any) -> Optional[Room]:
        """Remove a room; its markers fall back to the unassigned bucket."""
        room = self.rooms.remove(room_id)
        if room is not None:
            self.events.emit(
                AnnotationEvent(EventType.ROOM_REMOVED, {"room": room.to_dict()})
            )
        return room

    def rename_room(self, room_id: Any, name: str) -> Optional[Room]:
        room = self.rooms.rename(room_id, name)
        if room is not None:
            self.events.emit(
                AnnotationEvent(EventType.ROOM_RENAMED, {"room": room.to_dict()})
            )
        return room

    def set_legend_label(self, type_code: str, label: str):
        self.legend.set_label(type_code, label)
        self.events.emit(
            AnnotationEvent(
                EventType.LEGEND_CHANGED, {"type": type_code, "label": label}
            )
        )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def compute_tally(self) -> Tally:
        return compute_tally(self.markers, self.rooms, TYPE_CODES)

    def material_report(self) -> MaterialReport:
        return build_material_report(self.compute_tally(), self.legend, TYPE_CODES)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _place_marker(self, x: float, y: float) -> Marker:
        room = self.rooms.find_containing((x, y))
        marker = self.markers.add(self.context.active_type, (x, y), room)
        self.events.emit(
            AnnotationEvent(EventType.MARKER_ADDED, {"marker": marker.to_dict()})
        )
        return marker

    def _delete_at(self, x: float, y: float) -> Optional[Marker]:
        marker = self.markers.find_nearest((x, y), self.hit_threshold)
        if marker is None:
            return None
        return self.delete_marker(marker.id)

    def _room_click(self, x: float, y: float):
        ctx = self.context
        if ctx.room_start is None:
            ctx.room_start = (x, y)
            self.events.emit(
                AnnotationEvent(EventType.ROOM_DRAFT_STARTED, {"x": x, "y": y})
            )
            return None

        sx, sy = ctx.room_start
        rect = normalize_rect(sx, sy, x, y)
        ctx.mode = ToolMode.ROOM_NAMING
        ctx.pending_rect = rect
        ctx.room_start = None
        ctx.preview_rect = None
        self.events.emit(
            AnnotationEvent(EventType.ROOM_NAME_REQUESTED, {"rect": rect.to_dict()})
        )
        return rect

    def _ensure_not_naming(self):
        if self.context.mode == ToolMode.ROOM_NAMING:
            raise ToolStateError("Confirm or cancel the room name first")

    def _emit_tool_changed(self):
        self.events.emit(
            AnnotationEvent(
                EventType.TOOL_CHANGED,
                {"mode": self.context.mode.value, "type": self.context.active_type},
            )
        )

    @staticmethod
    def _image_size(image: np.ndarray) -> Tuple[int, int]:
        if image is None or not hasattr(image, "shape") or len(image.shape) < 2:
            raise GeometryError("Image must be an array with at least 2 dimensions")
        height, width = image.shape[:2]
        if width == 0 or height == 0:
            raise GeometryError(f"Image has no pixels: {width}x{height}")
        return int(height), int(width)
