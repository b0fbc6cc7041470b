"""
Tests for MarkerStore and RoomStore.
"""

import pytest

from installation_planner.core.annotation import (
    UNASSIGNED,
    Marker,
    MarkerStore,
    Rect,
    Room,
    RoomStore,
    ValidationError,
)


@pytest.fixture
def markers():
    return MarkerStore()


@pytest.fixture
def rooms(markers):
    return RoomStore(markers)


class TestMarkerStore:
    def test_add_assigns_unique_ids_in_order(self, markers):
        a = markers.add("A", (1, 2))
        b = markers.add("B", (3, 4))
        assert a.id != b.id
        assert [m.id for m in markers] == [a.id, b.id]
        assert a.room_id is None
        assert a.room_name == UNASSIGNED

    def test_add_with_room(self, markers):
        room = Room(id=7, name="Kitchen", x=0, y=0, width=10, height=10)
        marker = markers.add("C", (5, 5), room)
        assert marker.room_id == 7
        assert marker.room_name == "Kitchen"

    def test_add_rejects_unknown_type(self, markers):
        with pytest.raises(ValidationError):
            markers.add("Z", (0, 0))
        assert len(markers) == 0

    def test_find_nearest(self, markers):
        markers.add("A", (100, 100))
        near = markers.add("B", (110, 100))
        assert markers.find_nearest((112, 101), 30) is near

    def test_find_nearest_out_of_range(self, markers):
        markers.add("A", (100, 100))
        markers.add("B", (200, 200))
        assert markers.find_nearest((150, 10), 30) is None

    def test_find_nearest_tie_first_inserted(self, markers):
        first = markers.add("A", (90, 100))
        markers.add("B", (110, 100))
        assert markers.find_nearest((100, 100), 30) is first

    def test_remove_and_missing_remove(self, markers):
        marker = markers.add("A", (0, 0))
        assert markers.remove(marker.id) is marker
        assert markers.remove(marker.id) is None
        assert len(markers) == 0

    def test_reassign_room(self, markers):
        room = Room(id=1, name="Hall", x=0, y=0, width=10, height=10)
        other = Room(id=2, name="Bath", x=50, y=50, width=10, height=10)
        markers.add("A", (1, 1), room)
        markers.add("A", (2, 2), room)
        markers.add("A", (55, 55), other)
        assert markers.reassign_room(1, None, UNASSIGNED) == 2
        assert [m.room_name for m in markers] == [UNASSIGNED, UNASSIGNED, "Bath"]

    def test_ids_continue_after_loaded_markers(self):
        store = MarkerStore([Marker(id=41, type="A", x=0, y=0)])
        assert store.add("A", (1, 1)).id == 42

    def test_iteration_is_a_copy(self, markers):
        marker = markers.add("A", (0, 0))
        for m in markers:
            markers.remove(m.id)
        assert markers.get(marker.id) is None


class TestRoomStore:
    def test_add(self, rooms):
        room = rooms.add(Rect(0, 0, 100, 50), "  Kitchen ")
        assert room.name == "Kitchen"
        assert (room.x, room.y, room.width, room.height) == (0, 0, 100, 50)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_add_rejects_empty_name(self, rooms, name):
        with pytest.raises(ValidationError):
            rooms.add(Rect(0, 0, 10, 10), name)
        assert len(rooms) == 0

    def test_find_containing_first_match(self, rooms):
        first = rooms.add(Rect(0, 0, 100, 100), "Big")
        rooms.add(Rect(50, 50, 100, 100), "Overlap")
        assert rooms.find_containing((75, 75)) is first
        assert rooms.find_containing((140, 140)).name == "Overlap"
        assert rooms.find_containing((500, 500)) is None

    def test_find_containing_edges(self, rooms):
        room = rooms.add(Rect(10, 10, 20, 20), "Closet")
        assert rooms.find_containing((10, 10)) is room
        assert rooms.find_containing((30, 30)) is room

    def test_remove_cascades_to_markers(self, rooms, markers):
        room = rooms.add(Rect(0, 0, 100, 100), "Kitchen")
        marker = markers.add("A", (50, 50), room)
        rooms.remove(room.id)
        assert marker.room_id is None
        assert marker.room_name == UNASSIGNED
        assert len(markers) == 1

    def test_remove_missing_is_noop(self, rooms):
        rooms.add(Rect(0, 0, 1, 1), "x")
        assert rooms.remove(999) is None
        assert len(rooms) == 1

    def test_rename_resyncs_markers(self, rooms, markers):
        room = rooms.add(Rect(0, 0, 100, 100), "Kitchen")
        marker = markers.add("A", (50, 50), room)
        rooms.rename(room.id, "Dining")
        assert room.name == "Dining"
        assert marker.room_name == "Dining"

    def test_rename_rejects_empty(self, rooms):
        room = rooms.add(Rect(0, 0, 100, 100), "Kitchen")
        with pytest.raises(ValidationError):
            rooms.rename(room.id, " ")
        assert room.name == "Kitchen"

    @pytest.mark.parametrize("name", [UNASSIGNED, " Unassigned ", "UNASSIGNED"])
    def test_add_rejects_unassigned_bucket_name(self, rooms, name):
        with pytest.raises(ValidationError):
            rooms.add(Rect(0, 0, 10, 10), name)
        assert len(rooms) == 0

    def test_rename_rejects_unassigned_bucket_name(self, rooms):
        room = rooms.add(Rect(0, 0, 100, 100), "Kitchen")
        with pytest.raises(ValidationError):
            rooms.rename(room.id, UNASSIGNED)
        assert room.name == "Kitchen"
