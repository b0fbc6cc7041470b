"""
Project store interface.

The annotation core only talks to :class:`ProjectRepository`; whether the
projects live in a local JSON file or behind a REST endpoint is decided by
configuration.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List

from ..annotation.state import ProjectSnapshot


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProjectRepository(ABC):
    """Storage backend for project snapshots."""

    @abstractmethod
    def list(self) -> List[ProjectSnapshot]:
        """All stored projects."""

    @abstractmethod
    def get(self, project_id: Any) -> ProjectSnapshot:
        """
        Fetch one project.

        Raises:
            PersistenceError: If it cannot be fetched or does not exist
        """

    @abstractmethod
    def save(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        """Insert a new project and return it with its assigned id/timestamp."""

    @abstractmethod
    def update(self, project_id: Any, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        """Overwrite an existing project."""

    @abstractmethod
    def delete(self, project_id: Any) -> None:
        """Remove a project. Unknown ids are not an error."""
