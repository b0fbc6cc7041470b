"""Helpers shared by the subcommands."""

import json
import logging
from gettext import gettext as _
from pathlib import Path
from typing import Any, Optional, Tuple

from installation_planner.core.annotation import (
    AnnotationSession,
    PersistenceError,
    ProjectSnapshot,
)
from installation_planner.core.persistence import ProjectManager, create_repository
from installation_planner.interfaces.image_source import decode_data_url
from installation_planner.utils.config import load_config

logger = logging.getLogger(__name__)


def parse_project_id(value: str) -> Any:
    """Local ids are integers; remote ids are passed through as given."""
    try:
        return int(value)
    except ValueError:
        return value


def make_manager(args) -> ProjectManager:
    cfg = load_config(getattr(args, "settings", None))
    session = AnnotationSession(hit_threshold=float(cfg.editor.hit_threshold))
    return ProjectManager(session, create_repository(cfg), decode_image=decode_data_url)


def read_snapshot_file(path: Path) -> ProjectSnapshot:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return ProjectSnapshot.from_dict(json.load(f))
    except (OSError, ValueError, KeyError) as e:
        raise PersistenceError(
            _("Cannot read project file {path}: {error}").format(path=path, error=e)
        ) from e


def open_project(
    args, project: Optional[str] = None, project_file: Optional[Path] = None
) -> Tuple[AnnotationSession, ProjectSnapshot]:
    """
    Load a project either from a snapshot JSON file or from the store.
    """
    if project_file is not None:
        session = AnnotationSession()
        snapshot = read_snapshot_file(project_file)
        image = decode_data_url(snapshot.image) if snapshot.image else None
        session.load_project(snapshot, image)
        return session, snapshot

    if project is None:
        raise PersistenceError(_("Give a project id or a project file"))
    manager = make_manager(args)
    snapshot = manager.open(parse_project_id(project))
    return manager.session, snapshot
