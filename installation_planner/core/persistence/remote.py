"""
Project store behind a PostgREST-style HTTP endpoint.

Every request carries the API key both as ``apikey`` header and as a
bearer token.
"""

import logging
from typing import Any, List, Optional

import requests

from ..annotation.errors import PersistenceError
from ..annotation.state import ProjectSnapshot
from .base import ProjectRepository, utc_timestamp

logger = logging.getLogger(__name__)


class RemoteProjectStore(ProjectRepository):
    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "projects",
        timeout: float = 30,
        http: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Service root, e.g. ``https://xxxxx.supabase.co``
            api_key: Key sent with every request
            table: Resource holding the projects
            timeout: Per-request timeout in seconds
            http: Session to send requests with
        """
        if not base_url or not api_key:
            raise PersistenceError("Remote storage needs a base URL and an API key")
        self.endpoint = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.timeout = float(timeout)
        self.http = http or requests.Session()
        self.http.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, **kwargs) -> requests.Response:
        try:
            response = self.http.request(
                method, self.endpoint, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"{method} {self.endpoint} failed: {e}")
            raise PersistenceError(f"Remote storage request failed: {e}") from e
        return response

    @staticmethod
    def _json(response: requests.Response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceError(f"Invalid response from remote storage: {e}") from e

    def list(self) -> List[ProjectSnapshot]:
        response = self._request(
            "GET", params={"select": "*", "order": "created_at.desc"}
        )
        return [ProjectSnapshot.from_dict(p) for p in self._json(response) or []]

    def get(self, project_id: Any) -> ProjectSnapshot:
        response = self._request(
            "GET", params={"select": "*", "id": f"eq.{project_id}"}
        )
        rows = self._json(response) or []
        if not rows:
            raise PersistenceError(f"Project {project_id} not found")
        return ProjectSnapshot.from_dict(rows[0])

    def save(self, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        response = self._request(
            "POST",
            json=[snapshot.to_dict(include_meta=False)],
            headers={"Prefer": "return=representation"},
        )
        rows = self._json(response) or []
        if not rows:
            raise PersistenceError("Remote storage did not return the saved project")
        saved = ProjectSnapshot.from_dict(rows[0])
        logger.info(f"Saved project {saved.name!r} remotely as {saved.id}")
        return saved

    def update(self, project_id: Any, snapshot: ProjectSnapshot) -> ProjectSnapshot:
        body = snapshot.to_dict(include_meta=False)
        body["updated_at"] = utc_timestamp()
        self._request("PATCH", params={"id": f"eq.{project_id}"}, json=body)

        saved = snapshot.copy()
        saved.id = project_id
        saved.updated_at = body["updated_at"]
        logger.info(f"Updated remote project {project_id}")
        return saved

    def delete(self, project_id: Any) -> None:
        self._request("DELETE", params={"id": f"eq.{project_id}"})
        logger.info(f"Deleted remote project {project_id}")
