"""
End-to-end integration tests.

Tests complete workflows from start to finish.
"""

import io
import json

import pytest

from installation_planner.core.annotation import (
    AnnotationSession,
    DisplayRect,
    UNASSIGNED,
)
from installation_planner.core.persistence import LocalProjectStore, ProjectManager
from installation_planner.interfaces.gui_adapter import GUIAnnotationAdapter
from installation_planner.interfaces.image_source import decode_data_url, encode_data_url
from installation_planner.interfaces.report import render_report

pytestmark = pytest.mark.integration


class TestPlanningWorkflow:
    def test_annotate_save_load_and_export(self, test_image, tmp_path):
        """Annotate through pointer events, store, reopen and print."""
        session = AnnotationSession()
        adapter = GUIAnnotationAdapter(session)
        session.load_image(test_image)
        # shown at half size
        adapter.set_display_rect(0, 0, 300, 200)

        session.select_room_tool()
        adapter.on_click(0, 0)
        adapter.on_mouse_move(25, 25)
        adapter.on_click(50, 50)
        kitchen = session.confirm_room_name("Kitchen")
        assert (kitchen.width, kitchen.height) == (100, 100)

        session.select_marker_tool("A")
        adapter.on_click(25, 25)
        adapter.on_click(250, 150)
        session.select_marker_tool("F")
        adapter.on_click(10, 40)

        tally = session.compute_tally()
        assert tally["Kitchen"] == {"A": 1, "B": 0, "C": 0, "D": 0, "E": 0, "F": 1, "G": 0}
        assert tally[UNASSIGNED]["A"] == 1

        store = LocalProjectStore(tmp_path / "projects.json")
        manager = ProjectManager(session, store, decode_image=decode_data_url)
        saved = manager.save("Test house", encode_data_url(test_image))

        stored = json.loads((tmp_path / "projects.json").read_text())
        assert stored[0]["annotations"][0]["roomName"] == "Kitchen"

        reopened = AnnotationSession()
        ProjectManager(reopened, store, decode_image=decode_data_url).open(saved.id)
        assert reopened.compute_tally() == tally
        assert reopened.context.image_size == (600, 400)

        reopened.delete_room(reopened.rooms.all()[0].id)
        assert reopened.compute_tally()[UNASSIGNED]["A"] == 2
        assert session.compute_tally() == tally

        output = io.BytesIO()
        render_report(
            reopened.material_report(),
            GUIAnnotationAdapter(reopened).get_visualization(),
            saved.name,
            output,
        )
        assert output.getvalue().startswith(b"%PDF")

    def test_delete_tool_with_display_scaling(self, test_image):
        session = AnnotationSession()
        session.load_image(test_image)
        rect = DisplayRect(100, 100, 1200, 800)  # shown at double size

        session.select_marker_tool("B")
        marker = session.pointer_down(300, 300, rect)
        assert marker.position == (100.0, 100.0)

        session.select_delete_tool()
        # 50 display px away is 25 image px, within the hit threshold
        assert session.pointer_down(350, 300, rect) is marker
        assert len(session.markers) == 0
