"""
Tests for the pure geometry helpers.
"""

import pytest

from installation_planner.core.annotation.errors import GeometryError
from installation_planner.core.annotation.geometry import (
    DisplayRect,
    Rect,
    nearest_index,
    normalize_rect,
    to_image_space,
)


class TestToImageSpace:
    @pytest.mark.parametrize("x,y", [(0, 0), (10.5, 20.25), (599, 399), (-5, 700)])
    def test_identity_when_unscaled(self, x, y):
        rect = DisplayRect(0, 0, 600, 400)
        assert to_image_space(x, y, rect, 600, 400) == (x, y)

    def test_offset_and_scaling(self):
        # image of 1200x800 shown at half size, 100px from the left, 50px down
        rect = DisplayRect(100, 50, 600, 400)
        assert to_image_space(100, 50, rect, 1200, 800) == (0.0, 0.0)
        assert to_image_space(400, 250, rect, 1200, 800) == (600.0, 400.0)
        assert to_image_space(700, 450, rect, 1200, 800) == (1200.0, 800.0)

    def test_non_uniform_scaling(self):
        rect = DisplayRect(0, 0, 300, 100)
        assert to_image_space(150, 50, rect, 600, 400) == (300.0, 200.0)

    @pytest.mark.parametrize(
        "rect", [DisplayRect(0, 0, 0, 400), DisplayRect(0, 0, 600, 0), None]
    )
    def test_empty_display_rect(self, rect):
        with pytest.raises(GeometryError):
            to_image_space(10, 10, rect, 600, 400)

    def test_no_image(self):
        with pytest.raises(GeometryError):
            to_image_space(10, 10, DisplayRect(0, 0, 600, 400), 0, 0)


class TestNormalizeRect:
    @pytest.mark.parametrize(
        "p1,p2",
        [
            ((10, 20), (110, 70)),
            ((110, 70), (10, 20)),
            ((110, 20), (10, 70)),
            ((10, 70), (110, 20)),
        ],
    )
    def test_any_drag_direction(self, p1, p2):
        rect = normalize_rect(*p1, *p2)
        assert rect == Rect(10, 20, 100, 50)

    def test_zero_drag(self):
        rect = normalize_rect(5, 5, 5, 5)
        assert rect.width == 0 and rect.height == 0


class TestRectContains:
    def test_inclusive_edges(self):
        rect = Rect(0, 0, 100, 100)
        assert rect.contains(0, 0)
        assert rect.contains(100, 100)
        assert rect.contains(100, 0)
        assert rect.contains(50, 50)

    def test_outside(self):
        rect = Rect(0, 0, 100, 100)
        assert not rect.contains(100.01, 50)
        assert not rect.contains(50, -0.01)


class TestNearestIndex:
    def test_empty(self):
        assert nearest_index([], 0, 0, 30) == -1

    def test_closest_wins(self):
        points = [(0, 0), (10, 0), (4, 0)]
        assert nearest_index(points, 5, 0, 30) == 2

    def test_tie_goes_to_first(self):
        points = [(0, 0), (10, 0)]
        assert nearest_index(points, 5, 0, 30) == 0

    def test_threshold_is_exclusive(self):
        assert nearest_index([(30, 0)], 0, 0, 30) == -1
        assert nearest_index([(29.9, 0)], 0, 0, 30) == 0
