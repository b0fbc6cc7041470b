"""
Pure geometry helpers for the annotation engine.

These functions have no side effects and can be tested in isolation.
All returned coordinates are in image-space (native image pixels).
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .errors import GeometryError


@dataclass(frozen=True)
class DisplayRect:
    """On-screen bounding box of the displayed image."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with non-negative size."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test on all four edges."""
        return (
            self.x <= x <= self.x + self.width
            and self.y <= y <= self.y + self.height
        )

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def to_image_space(
    pointer_x: float,
    pointer_y: float,
    display_rect: DisplayRect,
    image_width: float,
    image_height: float,
) -> Tuple[float, float]:
    """
    Convert a pointer position to native image pixel coordinates.

    Args:
        pointer_x: Pointer X in display coordinates
        pointer_y: Pointer Y in display coordinates
        display_rect: Where the image is drawn on screen
        image_width: Native image width in pixels
        image_height: Native image height in pixels

    Returns:
        (x, y) in image-space

    Raises:
        GeometryError: If the display rect is empty or no image is loaded
    """
    if display_rect is None:
        raise GeometryError("No display rectangle")
    if display_rect.width <= 0 or display_rect.height <= 0:
        raise GeometryError(
            f"Display rectangle has no area: {display_rect.width}x{display_rect.height}"
        )
    if not image_width or not image_height:
        raise GeometryError("No image loaded")

    x = (pointer_x - display_rect.left) * image_width / display_rect.width
    y = (pointer_y - display_rect.top) * image_height / display_rect.height
    return float(x), float(y)


def normalize_rect(x1: float, y1: float, x2: float, y2: float) -> Rect:
    """
    Build a rectangle from two opposite corners in any drag direction.

    Returns:
        Rect with origin at the minimum corner and non-negative size
    """
    return Rect(
        x=min(x1, x2),
        y=min(y1, y2),
        width=abs(x2 - x1),
        height=abs(y2 - y1),
    )


def nearest_index(
    points: Sequence[Tuple[float, float]], x: float, y: float, max_distance: float
) -> int:
    """
    Find the point closest to (x, y).

    Args:
        points: Candidate (x, y) positions in insertion order
        x: Query X
        y: Query Y
        max_distance: Exclusive distance limit

    Returns:
        Index of the closest point, or -1 if none is closer than max_distance.
        On ties the lowest index wins.
    """
    if len(points) == 0:
        return -1

    coords = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    distances = np.hypot(coords[:, 0] - x, coords[:, 1] - y)

    # argmin returns the first occurrence of the minimum
    best = int(np.argmin(distances))
    if distances[best] < max_distance:
        return best
    return -1
