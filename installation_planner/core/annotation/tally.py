"""
Material count aggregation.

Pure functions turning markers and rooms into the room x type count matrix
and the rows of the printable material report.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .state import UNASSIGNED, Legend, Marker, Room, TYPE_CODES

Tally = Dict[str, Dict[str, int]]


def compute_tally(
    markers: Iterable[Marker],
    rooms: Iterable[Room],
    type_codes: Sequence[str] = TYPE_CODES,
) -> Tally:
    """
    Count markers per room name and type.

    Every room name plus the unassigned bucket gets a zero-initialized row
    for every type code. Rows follow room insertion order with the
    unassigned bucket last.

    Args:
        markers: Placed markers
        rooms: Rooms in insertion order
        type_codes: Column set

    Returns:
        Mapping room name -> type code -> count
    """
    tally: Tally = {}
    for room in rooms:
        if room.name not in tally:
            tally[room.name] = {code: 0 for code in type_codes}
    tally[UNASSIGNED] = {code: 0 for code in type_codes}

    for marker in markers:
        room_name = marker.room_name or UNASSIGNED
        row = tally.get(room_name)
        if row is None:
            # Stale name from loaded data, keep it countable
            row = tally[room_name] = {code: 0 for code in type_codes}
        row[marker.type] = row.get(marker.type, 0) + 1

    # keep the unassigned bucket last
    tally[UNASSIGNED] = tally.pop(UNASSIGNED)
    return tally


def tally_total(tally: Tally) -> int:
    return sum(sum(row.values()) for row in tally.values())


@dataclass
class ReportRow:
    room: str
    counts: Dict[str, int]
    total: int


@dataclass
class MaterialReport:
    """Rows of the material overview, zero-total rooms left out."""

    type_codes: List[str]
    legend: Dict[str, str]
    rows: List[ReportRow] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)
    grand_total: int = 0

    def header(self) -> List[str]:
        return [f"{code} - {self.legend[code]}" for code in self.type_codes]


def build_material_report(
    tally: Tally, legend: Legend, type_codes: Sequence[str] = TYPE_CODES
) -> MaterialReport:
    report = MaterialReport(
        type_codes=list(type_codes),
        legend={code: legend[code] for code in type_codes},
        totals={code: 0 for code in type_codes},
    )
    for room_name, counts in tally.items():
        total = sum(counts.get(code, 0) for code in type_codes)
        for code in type_codes:
            report.totals[code] += counts.get(code, 0)
        if total == 0:
            continue
        report.rows.append(
            ReportRow(
                room=room_name,
                counts={code: counts.get(code, 0) for code in type_codes},
                total=total,
            )
        )
    report.grand_total = sum(report.totals.values())
    return report
