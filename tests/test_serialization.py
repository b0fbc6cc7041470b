import json

from installation_planner.core.annotation import (
    AnnotationSession,
    ProjectSnapshot,
    UNASSIGNED,
)

STORED_PROJECT = """
{
  "id": 1718000000000,
  "name": "Woning Jansen",
  "image": null,
  "annotations": [
    {"id": 1718000000101, "type": "A", "x": 120.5, "y": 80, "roomId": 1718000000001, "roomName": "Keuken"},
    {"id": 1718000000102, "type": "B", "x": 900, "y": 700, "roomId": null, "roomName": "Ongedefinieerd"}
  ],
  "rooms": [
    {"id": 1718000000001, "name": "Keuken", "x": 0, "y": 0, "width": 400, "height": 300}
  ],
  "legend": {"A": "Armatuur", "B": "Wandcontactdoos"},
  "savedAt": "2024-06-10T08:00:00.000Z"
}
"""


def test_load_stored_project():
    snapshot = ProjectSnapshot.from_dict(json.loads(STORED_PROJECT))
    assert snapshot.markers[1].room_name == UNASSIGNED

    session = AnnotationSession()
    session.load_project(snapshot)
    tally = session.compute_tally()
    assert tally["Keuken"]["A"] == 1
    assert tally[UNASSIGNED]["B"] == 1
    assert session.legend["A"] == "Armatuur"

    assert not session.has_image
    assert session.markers.add("C", (1, 1)).id == 1718000000103


def test_snapshot_dict_is_json_serializable():
    snapshot = ProjectSnapshot.from_dict(json.loads(STORED_PROJECT))
    data = json.loads(json.dumps(snapshot.to_dict()))
    assert data["rooms"][0]["name"] == "Keuken"
    assert data["legend"]["G"]
