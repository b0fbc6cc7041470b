import logging
from gettext import gettext as _

from installation_planner.cli.common import open_project
from installation_planner.interfaces.gui_adapter import GUIAnnotationAdapter
from installation_planner.interfaces.report import render_report

logger = logging.getLogger(__name__)


def handle(args):
    session, snapshot = open_project(args, args.project, args.project_file)
    plan = GUIAnnotationAdapter(session).get_visualization()
    render_report(session.material_report(), plan, snapshot.name, str(args.output))
    print(_("Wrote {path}").format(path=args.output))
