from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Print the material count table of a project")


def command(subparser):
    subparser.add_argument("project", nargs="?", help=_("Stored project id"))
    subparser.add_argument(
        "-f", "--file", dest="project_file", type=Path, help=_("Project JSON file")
    )
    subparser.add_argument(
        "--all-rows",
        dest="all_rows",
        action="store_true",
        help=_("Also print rooms without any marker"),
    )

    def handle(args):
        from .tally import handle as tally_handle

        tally_handle(args)

    return handle
