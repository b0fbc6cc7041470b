from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Export the printable material report as PDF")


def command(subparser):
    subparser.add_argument("project", nargs="?", help=_("Stored project id"))
    subparser.add_argument(
        "-f", "--file", dest="project_file", type=Path, help=_("Project JSON file")
    )
    subparser.add_argument(
        "-o", "--output", dest="output", type=Path, required=True
    )

    def handle(args):
        from .export import handle as export_handle

        export_handle(args)

    return handle
