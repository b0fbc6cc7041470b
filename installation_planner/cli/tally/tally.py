from gettext import gettext as _

from installation_planner.cli.common import open_project
from installation_planner.core.annotation import TYPE_CODES


def format_table(session, all_rows: bool = False) -> str:
    report = session.material_report()
    header = [_("Room")] + report.header() + [_("Total")]
    lines = ["\t".join(header)]

    if all_rows:
        for room, counts in session.compute_tally().items():
            values = [counts[code] for code in TYPE_CODES]
            lines.append("\t".join([room] + [str(v) for v in values] + [str(sum(values))]))
    else:
        for row in report.rows:
            values = [str(row.counts[code]) for code in TYPE_CODES]
            lines.append("\t".join([row.room] + values + [str(row.total)]))

    lines.append(
        "\t".join(
            [_("TOTAL")]
            + [str(report.totals[code]) for code in TYPE_CODES]
            + [str(report.grand_total)]
        )
    )
    return "\n".join(lines)


def handle(args):
    session, _snapshot = open_project(args, args.project, args.project_file)
    print(format_table(session, args.all_rows))
