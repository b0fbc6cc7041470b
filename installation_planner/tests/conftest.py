"""
Test fixtures and utilities for installation planner tests.

Provides reusable fixtures for images, sessions and stores.
"""

import numpy as np
import pytest
from unittest.mock import Mock


@pytest.fixture
def test_image():
    """Create a test RGB floor plan (600 wide, 400 high)."""
    return np.full((400, 600, 3), 255, dtype=np.uint8)


@pytest.fixture
def session(test_image):
    """An AnnotationSession with an image loaded."""
    from installation_planner.core.annotation import AnnotationSession

    session = AnnotationSession()
    session.load_image(test_image)
    return session


@pytest.fixture
def listener(session):
    """Mock subscribed to every session event."""
    callback = Mock()
    session.events.on_any(callback)
    return callback


def draw_room(session, x1, y1, x2, y2, name):
    """Draw a room through the same clicks a user would make."""
    session.select_room_tool()
    session.click(x1, y1)
    session.click(x2, y2)
    return session.confirm_room_name(name)


def place(session, type_code, x, y):
    """Place one marker, leaving the tool selected afterwards."""
    if session.active_type != type_code:
        session.select_marker_tool(type_code)
    return session.click(x, y)


def event_types(listener):
    return [c.args[0].event_type for c in listener.call_args_list]
