"""
GUI adapter for annotation session.

Bridges the AnnotationSession with a drawing surface: redraws after every
session event and renders rooms and markers with OpenCV.
"""

from typing import Callable, Optional

import cv2
import numpy as np

from ..core.annotation import (
    AnnotationEvent,
    AnnotationSession,
    DisplayRect,
    EventType,
    TYPE_COLORS,
)

ROOM_COLOR = (0x21, 0x96, 0xF3)


class GUIAnnotationAdapter:
    """
    Adapter connecting AnnotationSession to a GUI canvas.

    Provides a compatibility layer that:
    - Forwards pointer events in display coordinates
    - Translates session events to a redraw callback
    - Handles visualization rendering

    Rendering only reads the session; it never mutates the stores.
    """

    def __init__(
        self,
        session: AnnotationSession,
        update_image_callback: Optional[Callable] = None,
        room_alpha: float = 0.1,
        font_scale: float = 1.0,
    ):
        """
        Initialize adapter.

        Args:
            session: Core annotation session
            update_image_callback: Callback to update GUI image
            room_alpha: Opacity of the room fill
            font_scale: Scale of marker letters and room names
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.room_alpha = room_alpha
        self.font_scale = font_scale
        self.display_rect: Optional[DisplayRect] = None

        self.session.events.on_any(self._on_event)

    def _on_event(self, event: AnnotationEvent):
        """Redraw on every state change except failures."""
        if event.event_type in (EventType.PERSISTENCE_FAILED, EventType.ROOM_NAME_REJECTED):
            return
        if self.update_image_callback:
            self.update_image_callback()

    def set_display_rect(self, left: float, top: float, width: float, height: float):
        """Record where the canvas currently shows the image."""
        self.display_rect = DisplayRect(left, top, width, height)

    def on_click(self, pointer_x: float, pointer_y: float):
        return self.session.pointer_down(pointer_x, pointer_y, self.display_rect)

    def on_mouse_move(self, pointer_x: float, pointer_y: float):
        return self.session.pointer_move(pointer_x, pointer_y, self.display_rect)

    def get_visualization(self) -> Optional[np.ndarray]:
        """
        Get visualization for display.

        Returns:
            RGB image in native resolution with rooms and markers drawn,
            or None when no image is loaded
        """
        image = self.session.context.image
        if image is None:
            return None

        result = image.copy()
        if result.ndim == 2:
            result = cv2.cvtColor(result, cv2.COLOR_GRAY2RGB)

        for room in self.session.rooms:
            self._draw_room(result, room.x, room.y, room.width, room.height, room.name)

        preview = self.session.preview_rect or self.session.pending_rect
        if preview is not None:
            self._draw_room(result, preview.x, preview.y, preview.width, preview.height)

        thickness = max(1, int(round(2 * self.font_scale)))
        for marker in self.session.markers:
            text = marker.type
            (tw, th), _ = cv2.getTextSize(
                text, cv2.FONT_HERSHEY_SIMPLEX, self.font_scale, thickness
            )
            origin = (int(marker.x - tw / 2), int(marker.y + th / 2))
            cv2.putText(
                result, text, (origin[0] + 1, origin[1] + 1),
                cv2.FONT_HERSHEY_SIMPLEX, self.font_scale, (0, 0, 0), thickness + 1,
            )
            cv2.putText(
                result, text, origin,
                cv2.FONT_HERSHEY_SIMPLEX, self.font_scale, TYPE_COLORS[marker.type], thickness,
            )

        return result

    def _draw_room(self, image, x, y, width, height, name: Optional[str] = None):
        p1 = (int(round(x)), int(round(y)))
        p2 = (int(round(x + width)), int(round(y + height)))

        overlay = image.copy()
        cv2.rectangle(overlay, p1, p2, ROOM_COLOR, -1)
        cv2.addWeighted(overlay, self.room_alpha, image, 1 - self.room_alpha, 0, dst=image)
        cv2.rectangle(image, p1, p2, ROOM_COLOR, 3)

        if name:
            cv2.putText(
                image, name, (p1[0] + 10, p1[1] + 30),
                cv2.FONT_HERSHEY_SIMPLEX, 0.8 * self.font_scale, ROOM_COLOR, 2,
            )
