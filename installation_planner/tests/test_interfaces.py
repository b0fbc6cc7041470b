"""
Tests for the collaborators around the core: image loading, rendering and
the PDF report.
"""

import io
from datetime import date
from unittest.mock import Mock, patch

import cv2
import numpy as np
import pytest

from installation_planner.core.annotation import (
    AnnotationSession,
    TYPE_COLORS,
    ValidationError,
)
from installation_planner.interfaces.gui_adapter import GUIAnnotationAdapter
from installation_planner.interfaces.image_source import (
    decode_data_url,
    decode_image_bytes,
    encode_data_url,
    load_image_file,
)
from installation_planner.interfaces.report import format_date, render_report

from .conftest import draw_room, place


class TestImageSource:
    def test_data_url_roundtrip(self, test_image):
        image = test_image.copy()
        image[10:20, 10:20] = (255, 0, 0)
        blob = encode_data_url(image)
        assert blob.startswith("data:image/png;base64,")
        decoded = decode_data_url(blob)
        np.testing.assert_array_equal(decoded, image)

    def test_invalid_bytes(self):
        with pytest.raises(ValidationError):
            decode_image_bytes(b"not an image")
        with pytest.raises(ValidationError):
            decode_image_bytes(b"")

    def test_empty_blob(self):
        with pytest.raises(ValidationError):
            decode_data_url("")

    def test_load_image_file(self, tmp_path):
        path = tmp_path / "plan.png"
        bgr = np.zeros((30, 40, 3), dtype=np.uint8)
        bgr[:, :, 0] = 255  # blue in BGR
        cv2.imwrite(str(path), bgr)

        image, blob = load_image_file(path)
        assert image.shape == (30, 40, 3)
        assert tuple(image[0, 0]) == (0, 0, 255)
        assert blob.startswith("data:image/png;base64,")


class TestGUIAnnotationAdapter:
    def test_redraw_on_every_change(self, session):
        callback = Mock()
        GUIAnnotationAdapter(session, update_image_callback=callback)
        place(session, "A", 50, 50)
        assert callback.call_count >= 2  # tool change + marker

    def test_pointer_forwarding(self, session):
        adapter = GUIAnnotationAdapter(session)
        adapter.set_display_rect(0, 0, 300, 200)
        session.select_marker_tool("B")
        marker = adapter.on_click(50, 50)
        assert marker.position == (100.0, 100.0)

    def test_rendering_is_read_only(self, session, test_image):
        adapter = GUIAnnotationAdapter(session)
        draw_room(session, 10, 10, 200, 200, "Kitchen")
        marker = place(session, "A", 100, 100)
        session.select_room_tool()
        session.click(300, 50)
        session.move(400, 150)

        before = session.snapshot("x")
        result = adapter.get_visualization()
        assert session.snapshot("x") == before
        assert session.preview_rect is not None

        assert result.shape == test_image.shape
        np.testing.assert_array_equal(session.context.image, test_image)
        assert not np.array_equal(result, test_image)

        # the marker letter uses the type color somewhere around its position
        x, y = int(marker.x), int(marker.y)
        patch = result[y - 20 : y + 20, x - 20 : x + 20].reshape(-1, 3)
        assert (patch == np.array(TYPE_COLORS["A"])).all(axis=1).any()

    def test_no_image(self):
        assert GUIAnnotationAdapter(AnnotationSession()).get_visualization() is None


class TestReport:
    def test_format_date(self):
        assert format_date(date(2024, 3, 7)) == "07-03-2024"

    def test_render_pdf(self, session):
        draw_room(session, 0, 0, 100, 100, "Kitchen & <Dining>")
        place(session, "A", 50, 50)
        place(session, "C", 500, 300)
        plan = GUIAnnotationAdapter(session).get_visualization()

        output = io.BytesIO()
        render_report(
            session.material_report(), plan, "House <1>", output, date(2024, 1, 2)
        )
        data = output.getvalue()
        assert data.startswith(b"%PDF")
        assert len(data) > 1000

    def test_render_without_image(self, tmp_path):
        session = AnnotationSession()
        path = tmp_path / "report.pdf"
        render_report(session.material_report(), None, "", str(path))
        assert path.read_bytes().startswith(b"%PDF")

    def test_unencodable_plan(self, session, test_image):
        target = "installation_planner.interfaces.report.cv2.imencode"
        with patch(target, return_value=(False, None)):
            with pytest.raises(ValidationError):
                render_report(session.material_report(), test_image, "House", io.BytesIO())
