"""
Ordered collections of markers and rooms.

Insertion order is kept everywhere: it drives render order, report order
and the first-match room containment rule.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from ...utils.misc import incrf
from .errors import ValidationError
from .geometry import Rect, nearest_index
from .state import UNASSIGNED, Marker, Room, validate_type_code

logger = logging.getLogger(__name__)

# Marker glyph size in image pixels
HIT_THRESHOLD = 30.0


def _next_counter(existing: Iterable[Any]):
    numeric = [i for i in existing if isinstance(i, int) and not isinstance(i, bool)]
    return incrf(max(numeric) + 1 if numeric else 1)


def _clean_room_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Room name must not be empty")
    # the tally keys rows by name, this one is the bucket for markers without a room
    if name.casefold() == UNASSIGNED.casefold():
        raise ValidationError(f"Room name {name!r} is reserved")
    return name


class MarkerStore:
    """Holds placed markers in insertion order."""

    def __init__(self, markers: Optional[Iterable[Marker]] = None):
        self._markers: List[Marker] = list(markers or [])
        self._ids = _next_counter(m.id for m in self._markers)

    def __len__(self):
        return len(self._markers)

    def __iter__(self) -> Iterator[Marker]:
        return iter(list(self._markers))

    def all(self) -> List[Marker]:
        return list(self._markers)

    def get(self, marker_id: Any) -> Optional[Marker]:
        for marker in self._markers:
            if marker.id == marker_id:
                return marker
        return None

    def add(
        self, type_code: str, position: Tuple[float, float], room: Optional[Room] = None
    ) -> Marker:
        """
        Append a new marker.

        Args:
            type_code: One of the fixed type codes
            position: (x, y) in image-space
            room: Containing room, or None for the unassigned bucket

        Returns:
            The created marker
        """
        validate_type_code(type_code)
        x, y = position
        marker = Marker(
            id=next(self._ids),
            type=type_code,
            x=float(x),
            y=float(y),
            room_id=room.id if room is not None else None,
            room_name=room.name if room is not None else UNASSIGNED,
        )
        self._markers.append(marker)
        logger.debug(f"Added marker {marker.id} ({type_code}) in {marker.room_name}")
        return marker

    def find_nearest(
        self, position: Tuple[float, float], max_distance: float = HIT_THRESHOLD
    ) -> Optional[Marker]:
        """Closest marker strictly within max_distance, first inserted on ties."""
        x, y = position
        index = nearest_index([m.position for m in self._markers], x, y, max_distance)
        if index < 0:
            return None
        return self._markers[index]

    def remove(self, marker_id: Any) -> Optional[Marker]:
        """Remove by id. Unknown ids are ignored."""
        for index, marker in enumerate(self._markers):
            if marker.id == marker_id:
                return self._markers.pop(index)
        return None

    def reassign_room(
        self, old_room_id: Any, new_room_id: Optional[Any], new_room_name: str
    ) -> int:
        """
        Point every marker of one room at another (or at the unassigned bucket).

        Returns:
            Number of markers updated
        """
        updated = 0
        for marker in self._markers:
            if marker.room_id == old_room_id:
                marker.room_id = new_room_id
                marker.room_name = new_room_name
                updated += 1
        return updated

    def clear(self):
        self._markers.clear()
        self._ids = incrf()


class RoomStore:
    """
    Holds room rectangles in insertion order.

    Removing a room resets the markers that referenced it to the unassigned
    bucket of the attached MarkerStore.
    """

    def __init__(
        self, markers: Optional[MarkerStore] = None, rooms: Optional[Iterable[Room]] = None
    ):
        self.markers = markers
        self._rooms: List[Room] = list(rooms or [])
        self._ids = _next_counter(r.id for r in self._rooms)

    def __len__(self):
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms))

    def all(self) -> List[Room]:
        return list(self._rooms)

    def get(self, room_id: Any) -> Optional[Room]:
        for room in self._rooms:
            if room.id == room_id:
                return room
        return None

    def add(self, rect: Rect, name: str) -> Room:
        """
        Append a named room.

        Raises:
            ValidationError: If the name is empty, whitespace only or the
                name of the unassigned bucket
        """
        name = _clean_room_name(name)
        room = Room(
            id=next(self._ids),
            name=name,
            x=float(rect.x),
            y=float(rect.y),
            width=float(rect.width),
            height=float(rect.height),
        )
        self._rooms.append(room)
        logger.debug(f"Added room {room.id} {room.name!r} at {rect}")
        return room

    def remove(self, room_id: Any) -> Optional[Room]:
        """Remove by id and release its markers. Unknown ids are ignored."""
        for index, room in enumerate(self._rooms):
            if room.id == room_id:
                del self._rooms[index]
                if self.markers is not None:
                    released = self.markers.reassign_room(room_id, None, UNASSIGNED)
                    logger.debug(f"Room {room.name!r} removed, {released} markers released")
                return room
        return None

    def rename(self, room_id: Any, name: str) -> Optional[Room]:
        """Rename a room and re-sync the room name stored on its markers."""
        name = _clean_room_name(name)
        room = self.get(room_id)
        if room is None:
            return None
        room.name = name
        if self.markers is not None:
            self.markers.reassign_room(room_id, room_id, name)
        return room

    def find_containing(self, position: Tuple[float, float]) -> Optional[Room]:
        """First room in insertion order whose rectangle contains the point."""
        x, y = position
        for room in self._rooms:
            if room.contains(x, y):
                return room
        return None

    def clear(self):
        self._rooms.clear()
        self._ids = incrf()
