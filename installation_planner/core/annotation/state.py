"""
State management for annotation sessions.

Contains data classes representing markers, rooms, the type legend and the
serializable project snapshot. Dictionary keys follow the stored project
format (``annotations``, ``roomId``, ``savedAt``...).
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from gettext import gettext as _
from typing import Any, Dict, List, Optional, Tuple

from .errors import ValidationError
from .geometry import Rect

TYPE_CODES: Tuple[str, ...] = ("A", "B", "C", "D", "E", "F", "G")

# RGB
TYPE_COLORS: Dict[str, Tuple[int, int, int]] = {
    "A": (0xFF, 0x6B, 0x6B),
    "B": (0x4E, 0xCD, 0xC4),
    "C": (0x45, 0xB7, 0xD1),
    "D": (0xFF, 0xA0, 0x7A),
    "E": (0x98, 0xD8, 0xC8),
    "F": (0xF7, 0xDC, 0x6F),
    "G": (0xBB, 0x8F, 0xCE),
}

UNASSIGNED = "unassigned"


def default_legend_labels() -> Dict[str, str]:
    return {
        "A": _("Fixture"),
        "B": _("Wall socket"),
        "C": _("PIR sensor"),
        "D": _("Switch"),
        "E": _("WHOOP detector"),
        "F": _("Lighting"),
        "G": _("Other"),
    }


def validate_type_code(type_code: str) -> str:
    if type_code not in TYPE_CODES:
        raise ValidationError(f"Unknown marker type: {type_code!r}")
    return type_code


class ToolMode(Enum):
    """Tool modes of the annotation engine."""

    IDLE = "idle"
    TOOL_SELECTED = "tool_selected"
    ROOM_DRAWING = "room_drawing"
    ROOM_NAMING = "room_naming"
    DELETE = "delete"


@dataclass
class Marker:
    """A typed point annotation placed on the floor plan."""

    id: Any
    type: str
    x: float
    y: float
    room_id: Optional[Any] = None
    room_name: str = UNASSIGNED

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "roomId": self.room_id,
            "roomName": self.room_name,
        }

    @classmethod
    def from_dict(cls, data: dict, room_names: Optional[Dict[Any, str]] = None):
        """
        Create from dictionary.

        Args:
            data: Stored marker
            room_names: Room id -> name, used when the marker has no roomName
        """
        room_id = data.get("roomId")
        # without a room the stored label is whatever sentinel the writer used
        room_name = None
        if room_id is not None:
            room_name = data.get("roomName") or (room_names or {}).get(room_id)
            if not room_name:
                room_id = None
        return cls(
            id=data["id"],
            type=validate_type_code(data["type"]),
            x=float(data["x"]),
            y=float(data["y"]),
            room_id=room_id,
            room_name=room_name or UNASSIGNED,
        )


@dataclass
class Room:
    """A named rectangle grouping markers for reporting."""

    id: Any
    name: str
    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return self.rect.contains(x, y)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            id=data["id"],
            name=data["name"],
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )


class Legend:
    """
    Display label for every type code.

    Always fully populated: missing codes fall back to the default labels.
    """

    def __init__(self, labels: Optional[Dict[str, str]] = None):
        self._labels = default_legend_labels()
        for code, label in (labels or {}).items():
            self.set_label(code, label)

    def set_label(self, type_code: str, label: str):
        validate_type_code(type_code)
        self._labels[type_code] = str(label)

    def label(self, type_code: str) -> str:
        return self._labels[type_code]

    def __getitem__(self, type_code: str) -> str:
        return self._labels[type_code]

    def __iter__(self):
        return iter(TYPE_CODES)

    def __len__(self):
        return len(self._labels)

    def __eq__(self, other):
        if isinstance(other, Legend):
            return self._labels == other._labels
        return NotImplemented

    def __repr__(self):
        return f"Legend({self._labels!r})"

    def items(self):
        return [(code, self._labels[code]) for code in TYPE_CODES]

    def copy(self) -> "Legend":
        return Legend(dict(self._labels))

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        return cls({k: v for k, v in (data or {}).items() if k in TYPE_CODES})


@dataclass
class ProjectSnapshot:
    """
    Serializable bundle exchanged with the project store.

    ``image`` is an opaque encoded blob (a data URL); the core never looks
    inside it.
    """

    name: str
    image: Optional[str] = None
    markers: List[Marker] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    legend: Legend = field(default_factory=Legend)
    id: Optional[Any] = None
    saved_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def copy(self) -> "ProjectSnapshot":
        """Independent value copy, no shared mutable state."""
        return copy.deepcopy(self)

    def to_dict(self, include_meta: bool = True):
        """Convert to dictionary for serialization."""
        data = {
            "name": self.name,
            "image": self.image,
            "annotations": [m.to_dict() for m in self.markers],
            "rooms": [r.to_dict() for r in self.rooms],
            "legend": self.legend.to_dict(),
        }
        if include_meta:
            for key, value in (
                ("id", self.id),
                ("savedAt", self.saved_at),
                ("created_at", self.created_at),
                ("updated_at", self.updated_at),
            ):
                if value is not None:
                    data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        rooms = [Room.from_dict(r) for r in data.get("rooms") or []]
        room_names = {room.id: room.name for room in rooms}
        return cls(
            name=data.get("name", ""),
            image=data.get("image"),
            markers=[
                Marker.from_dict(m, room_names) for m in data.get("annotations") or []
            ],
            rooms=rooms,
            legend=Legend.from_dict(data.get("legend")),
            id=data.get("id"),
            saved_at=data.get("savedAt"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def __repr__(self) -> str:
        return (
            f"<ProjectSnapshot {self.name!r} id={self.id!r} "
            f"({len(self.markers)} markers, {len(self.rooms)} rooms)>"
        )
