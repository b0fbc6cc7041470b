from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("List, import, dump or delete stored projects")


def command(subparser):
    actions = subparser.add_subparsers(dest="action")
    actions.add_parser("list", help=_("List stored projects"))

    delete = actions.add_parser("delete", help=_("Delete a stored project"))
    delete.add_argument("project")

    dump = actions.add_parser("dump", help=_("Write a stored project to a JSON file"))
    dump.add_argument("project")
    dump.add_argument("output", type=Path)

    import_ = actions.add_parser(
        "import", help=_("Store a project JSON file (or a floor-plan image)")
    )
    import_.add_argument("input", type=Path)
    import_.add_argument("-n", "--name", dest="name", default=None)

    def handle(args):
        from .projects import handle as projects_handle

        projects_handle(args)

    return handle
