import json
import logging
from gettext import gettext as _

from installation_planner.cli.common import (
    make_manager,
    parse_project_id,
    read_snapshot_file,
)
from installation_planner.interfaces.image_source import load_image_file

logger = logging.getLogger(__name__)


def handle(args):
    manager = make_manager(args)
    action = args.action or "list"

    if action == "list":
        projects = manager.list()
        if not projects:
            print(_("No projects"))
        for p in projects:
            stamp = p.updated_at or p.saved_at or p.created_at or ""
            print(
                _("{id}\t{name}\t{markers} markers, {rooms} rooms\t{stamp}").format(
                    id=p.id,
                    name=p.name,
                    markers=len(p.markers),
                    rooms=len(p.rooms),
                    stamp=stamp,
                )
            )

    elif action == "delete":
        project_id = parse_project_id(args.project)
        manager.delete(project_id)
        print(_("Deleted project {id}").format(id=project_id))

    elif action == "dump":
        snapshot = manager.get(parse_project_id(args.project))
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, ensure_ascii=False, indent=2)
        print(_("Wrote {path}").format(path=args.output))

    elif action == "import":
        if args.input.suffix.lower() == ".json":
            snapshot = read_snapshot_file(args.input)
            image = None
            if snapshot.image and manager.decode_image is not None:
                image = manager.decode_image(snapshot.image)
            snapshot.id = None
            manager.session.load_project(snapshot, image)
            blob = snapshot.image
            name = args.name or snapshot.name
        else:
            image, blob = load_image_file(args.input)
            manager.session.load_image(image, blob)
            name = args.name or args.input.stem
        saved = manager.save(name, blob)
        print(_("Stored project {name!r} as {id}").format(name=saved.name, id=saved.id))
