"""
Project store backed by a single JSON file on disk.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List

from ..annotation.errors import PersistenceError
from ..annotation.state import ProjectSnapshot
from .base import ProjectRepository, utc_timestamp

logger = logging.getLogger(__name__)


class LocalProjectStore(ProjectRepository):
    """
    Keeps every project in one JSON list.

    Ids are millisecond timestamps, bumped when they would collide.
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} does not contain a project list")
        return data

    def _write(self, projects: List[Dict[str, Any]]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".projects-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(projects, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e

    def list(self) -> List[ProjectSnapshot]:
        return [ProjectSnapshot.from_dict(p) for p in self._read()]

    def get(self, project_id: Any) -> ProjectSnapshot:
        for data in self._read():
            if data.get("id") == project_id:
                return ProjectSnapshot.from_dict(data)
        raise PersistenceError(f"Project {project_id} not found")

    def save(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        projects = self._read()
        used = {p.get("id") for p in projects}
        new_id = int(time.time() * 1000)
        while new_id in used:
            new_id += 1

        saved = snapshot.copy()
        saved.id = new_id
        saved.saved_at = utc_timestamp()
        projects.append(saved.to_dict())
        self._write(projects)
        logger.info(f"Saved project {saved.name!r} locally as {new_id}")
        return saved

    def update(self, project_id: Any, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        projects = self._read()
        for index, data in enumerate(projects):
            if data.get("id") == project_id:
                break
        else:
            raise PersistenceError(f"Project {project_id} not found")

        saved = snapshot.copy()
        saved.id = project_id
        saved.saved_at = utc_timestamp()
        projects[index] = saved.to_dict()
        self._write(projects)
        logger.info(f"Updated local project {project_id}")
        return saved

    def delete(self, project_id: Any) -> None:
        projects = self._read()
        remaining = [p for p in projects if p.get("id") != project_id]
        if len(remaining) != len(projects):
            self._write(remaining)
            logger.info(f"Deleted local project {project_id}")
