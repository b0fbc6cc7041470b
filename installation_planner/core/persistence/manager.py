"""
Coordinates the editing session with the project store.

Only one store call may run at a time, and the session is only touched
after a call has succeeded.
"""

import logging
import threading
from typing import Any, Callable, List, Optional

import numpy as np

from ..annotation.errors import PersistenceBusyError, PersistenceError, ValidationError
from ..annotation.events import AnnotationEvent, EventType
from ..annotation.session import AnnotationSession
from ..annotation.state import ProjectSnapshot
from .base import ProjectRepository

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[str], np.ndarray]


class ProjectManager:
    def __init__(
        self,
        session: AnnotationSession,
        repository: ProjectRepository,
        decode_image: Optional[ImageDecoder] = None,
    ):
        """
        Args:
            session: Session whose content is saved and replaced
            repository: Project store
            decode_image: Turns a stored image blob into an array
        """
        self.session = session
        self.repository = repository
        self.decode_image = decode_image
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _run(self, operation: str, fn: Callable[[], Any]):
        if not self._lock.acquire(blocking=False):
            raise PersistenceBusyError(
                f"Cannot {operation}: another storage operation is in progress"
            )
        try:
            return fn()
        except PersistenceError as e:
            self.session.events.emit(
                AnnotationEvent(
                    EventType.PERSISTENCE_FAILED,
                    {"operation": operation, "error": str(e)},
                )
            )
            raise
        finally:
            self._lock.release()

    def list(self) -> List[ProjectSnapshot]:
        return self._run("list projects", self.repository.list)

    def save(self, name: str, image_blob: Optional[str] = None) -> ProjectSnapshot:
        """
        Insert the current session as a new project, or update it when it
        was opened from (or already saved to) the store.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Project name must not be empty")

        def _save():
            snapshot = self.session.snapshot(name, image_blob)
            if snapshot.id is not None:
                saved = self.repository.update(snapshot.id, snapshot)
            else:
                saved = self.repository.save(snapshot)
            self.session.context.project_id = saved.id
            self.session.context.image_blob = snapshot.image
            self.session.events.emit(
                AnnotationEvent(
                    EventType.PROJECT_SAVED, {"id": saved.id, "name": saved.name}
                )
            )
            return saved

        return self._run("save project", _save)

    def get(self, project_id: Any) -> ProjectSnapshot:
        """Fetch a stored project without touching the session."""
        return self._run("get project", lambda: self.repository.get(project_id))

    def open(self, project_id: Any) -> ProjectSnapshot:
        def _open():
            snapshot = self.repository.get(project_id)
            image = None
            if snapshot.image and self.decode_image is not None:
                image = self.decode_image(snapshot.image)
            self.session.load_project(snapshot, image)
            return snapshot

        return self._run("open project", _open)

    def delete(self, project_id: Any) -> None:
        def _delete():
            self.repository.delete(project_id)
            if self.session.context.project_id == project_id:
                self.session.context.project_id = None
            self.session.events.emit(
                AnnotationEvent(EventType.PROJECT_DELETED, {"id": project_id})
            )

        return self._run("delete project", _delete)
