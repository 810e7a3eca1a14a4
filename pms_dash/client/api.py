"""
HTTP client for the PMS backend.

Wraps a ``requests.Session`` bound to the API base URL. Every transport error
and every non-2xx response surfaces as ``BackendUnavailable`` so the stores
above it only ever deal with one failure type. No retries: a failed call is
reported once and the user decides whether to try again.
"""
import logging
from typing import Any, Optional

import requests

from pms_dash.core.config import settings
from pms_dash.core.exceptions import BackendUnavailable

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin JSON client for the /api/v1 endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send one request and decode the JSON body.

        Returns:
            The decoded body, or None for an empty response.

        Raises:
            BackendUnavailable: On connection errors, timeouts or a non-2xx status.
        """
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise BackendUnavailable(f"Backend unreachable: {e}") from e

        if not response.ok:
            message = _error_message(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise BackendUnavailable(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendUnavailable(f"Invalid JSON from {url}", status_code=response.status_code) from e

    def get(self, path: str, **params) -> Any:
        return self.request("GET", path, params=params or None)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, json=body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, json=body)

    def login(self, employee_code: str, password: str) -> dict:
        """Authenticate and attach the bearer token to every later request."""
        auth = self.post("auth/login", {"employeeCode": employee_code, "password": password})
        self.session.headers["Authorization"] = f"Bearer {auth['token']}"
        logger.info("Logged in as %s (%s)", auth.get("employeeCode"), auth.get("role"))
        return auth

    def logout(self) -> None:
        self.session.headers.pop("Authorization", None)
        self.session.cookies.clear()

    def close(self) -> None:
        self.logout()
        self.session.close()


def _error_message(response: requests.Response) -> str:
    """Best-effort human message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        detail = body.get("message") or body.get("detail")
        if isinstance(detail, str):
            return detail
        if detail:
            return str(detail)
    return f"HTTP {response.status_code}"
