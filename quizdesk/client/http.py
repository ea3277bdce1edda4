"""HTTP client for the quiz platform backend."""
from __future__ import annotations

import logging
from typing import Any

import requests

from quizdesk import config
from quizdesk.errors import (
    ApiError,
    ApiValidationError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    QuizEndedError,
    QuizNotStartedError,
    ServiceUnavailableError,
)
from quizdesk.storage import KeyValueStorage, MemoryStorage
from quizdesk.utils import json_dump, json_load

log = logging.getLogger(__name__)


def error_message(payload: dict[str, Any], fallback: str) -> str:
    """Pick the human readable message from an error body."""
    for key in ("error", "message", "detail"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return fallback


class QuizApiClient:
    """Thin wrapper around :class:`requests.Session`.

    The bearer token is read from ``storage`` before every request, so a
    login performed elsewhere (another CLI invocation, the web player) is
    picked up without rebuilding the client. A 401 reply clears the stored
    credentials.
    """

    def __init__(
        self,
        base_url: str | None = None,
        storage: KeyValueStorage | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.storage = storage if storage is not None else MemoryStorage()
        self.session = session or requests.Session()
        self.timeout = timeout or config.REQUEST_TIMEOUT_SECONDS

    # credentials

    @property
    def token(self) -> str | None:
        return self.storage.get(config.TOKEN_KEY)

    def store_credentials(self, token: str, user: dict[str, Any] | None) -> None:
        self.storage.set(config.TOKEN_KEY, token)
        if user is not None:
            self.storage.set(config.USER_KEY, json_dump(user))

    def clear_credentials(self) -> None:
        self.storage.clear(config.TOKEN_KEY)
        self.storage.clear(config.USER_KEY)

    @property
    def current_user(self) -> dict[str, Any] | None:
        raw = self.storage.get(config.USER_KEY)
        if not raw:
            return None
        try:
            user = json_load(raw)
        except ValueError:
            log.warning("Stored user payload is not valid JSON; ignoring it")
            return None
        return user if isinstance(user, dict) else None

    @property
    def is_admin(self) -> bool:
        user = self.current_user
        return bool(user and user.get("role") == "admin")

    # requests

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiError: a subclass matching the failure.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=self._headers(),
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as exc:
            log.warning("%s %s failed: %s", method, url, exc)
            raise ServiceUnavailableError(str(exc) or "Network error") from exc

        if response.status_code >= 400:
            self._raise_for_status(method, url, response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "Backend returned a non-JSON response",
                status_code=response.status_code,
            ) from exc

    def _raise_for_status(self, method: str, url: str, response: requests.Response) -> None:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        status = response.status_code
        message = error_message(payload, response.reason or f"HTTP {status}")
        kwargs = {"status_code": status, "payload": payload}

        if payload.get("notStarted"):
            raise QuizNotStartedError(message, start_date=payload.get("startDate"), **kwargs)
        if payload.get("ended"):
            raise QuizEndedError(message, end_date=payload.get("endDate"), **kwargs)

        if status == 401:
            self.clear_credentials()
            raise AuthenticationError(message, **kwargs)
        if status == 403:
            log.warning("Access denied: %s", message)
            raise PermissionDeniedError(message, **kwargs)
        if status == 404:
            raise NotFoundError(message, **kwargs)
        if status >= 500:
            log.warning("%s %s returned %s: %s", method, url, status, message)
            raise ServiceUnavailableError(message, **kwargs)
        raise ApiValidationError(message, **kwargs)

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Any:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        self.session.close()
