"""
Project persistence: local JSON file or remote REST store.
"""

import logging
from gettext import gettext as _

from ..annotation.errors import PersistenceError
from .base import ProjectRepository
from .local import LocalProjectStore
from .manager import ProjectManager
from .remote import RemoteProjectStore

logger = logging.getLogger(__name__)


def create_repository(cfg) -> ProjectRepository:
    """Build the project store selected by ``cfg.storage.backend``."""
    backend = cfg.storage.backend
    if backend == "remote":
        remote = cfg.storage.remote
        logger.debug(_("Using remote project storage at {url}").format(url=remote.base_url))
        return RemoteProjectStore(
            remote.base_url,
            remote.api_key,
            table=remote.get("table", "projects"),
            timeout=float(remote.get("timeout", 30)),
        )
    if backend == "local":
        logger.debug(
            _("Using local project storage at {path}").format(path=cfg.storage.local_path)
        )
        return LocalProjectStore(cfg.storage.local_path)
    raise PersistenceError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "ProjectRepository",
    "LocalProjectStore",
    "RemoteProjectStore",
    "ProjectManager",
    "create_repository",
]
