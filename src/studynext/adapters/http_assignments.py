"""HTTP assignment adapter - JSON REST client for cloud storage."""

import logging

import requests

from studynext.config import Config, load_config

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when the API rejects or lacks credentials."""

    pass


class DataSourceError(Exception):
    """Raised when the assignment API call fails."""

    pass


class HttpAssignmentRepository:
    """
    Cloud assignment storage over a JSON REST API.

    Implements AssignmentRepository protocol. No business logic - just I/O.

    Endpoints:
        GET    /users/{uid}/homework
        POST   /users/{uid}/homework      -> {"id": ...}
        PATCH  /homework/{id}
        DELETE /homework/{id}
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self.base_url = self.config.api_base_url.rstrip("/")
        self._session = session or requests.Session()

    def _headers(self) -> dict:
        if not self.config.api_token:
            raise AuthenticationError("No API token. Set API_TOKEN in studynext.conf.")
        return {"Authorization": f"Bearer {self.config.api_token}"}

    def _request(self, method: str, endpoint: str, **kwargs):
        """Make authenticated API request."""
        try:
            resp = self._session.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=self._headers(),
                timeout=10,
                **kwargs,
            )
        except requests.RequestException as e:
            raise DataSourceError(f"{method} {endpoint} failed: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"API rejected credentials: {resp.text}")
        if resp.status_code >= 400:
            logger.error(f"{method} {endpoint} returned {resp.status_code}: {resp.text}")
            raise DataSourceError(f"SERVER_ERROR: {resp.status_code} {resp.text}")

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def get_all(self, user_id: str) -> list[dict]:
        """Fetch all assignment records for a user."""
        data = self._request("GET", f"/users/{user_id}/homework")
        if isinstance(data, dict):
            data = data.get("homework", [])
        return data or []

    def add(self, user_id: str, fields: dict) -> str:
        """Create an assignment. Returns its new id."""
        data = self._request(
            "POST",
            f"/users/{user_id}/homework",
            json={**fields, "userId": user_id, "isCompleted": False},
        )
        return data["id"]

    def update(self, assignment_id: str, fields: dict) -> None:
        """Merge fields into an existing assignment."""
        self._request("PATCH", f"/homework/{assignment_id}", json=fields)

    def delete(self, assignment_id: str) -> None:
        """Remove an assignment."""
        self._request("DELETE", f"/homework/{assignment_id}")
