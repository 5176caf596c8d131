"""HTTP client for the students API.

Every public call goes through ``_call`` which spells out the cross-cutting
steps in order: auth header, loading bookkeeping, dispatch, error
translation and notification.
"""

import logging
from typing import Any, Callable, Dict, List, MutableMapping, Optional
from urllib.parse import quote

import requests

from client.loading import LoadingState
from client.messages import ApiError, describe_error, field_errors_from
from settings import settings

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"


def with_auth_header(
    storage: MutableMapping[str, str], headers: Optional[Dict[str, str]] = None
) -> Dict[str, str]:
    """Copy ``headers`` and add a bearer token when one is stored."""
    headers = dict(headers or {})
    token = storage.get(TOKEN_KEY)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _log_notification(message: str) -> None:
    logger.error(message)


def _parse_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class StudentApiClient:
    """Client for ``/students`` endpoints.

    ``notify`` receives one message per failed call (the UI shell decides
    how to show it); ``storage`` plays the part of client-side storage and
    may hold an ``auth_token``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        storage: Optional[MutableMapping[str, str]] = None,
        notify: Optional[Callable[[str], None]] = None,
        loading: Optional[LoadingState] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.storage = storage if storage is not None else {}
        if settings.api_token and TOKEN_KEY not in self.storage:
            self.storage[TOKEN_KEY] = settings.api_token
        self.notify = notify or _log_notification
        self.loading = loading or LoadingState()
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout

    # --------------------
    # Public operations
    # --------------------
    def list_all(self) -> List[dict]:
        return self._call("GET", "/students", resource="students")

    def get_one(self, student_id: int) -> dict:
        return self._call(
            "GET", f"/students/{student_id}", resource="student", resource_id=student_id
        )

    def list_by_department(self, department: str) -> List[dict]:
        return self._call(
            "GET",
            f"/students/department/{quote(department, safe='')}",
            resource="students",
            resource_id=f"department:{department}",
        )

    def create(self, student: Dict[str, str]) -> dict:
        return self._call("POST", "/students", resource="students", json=student)

    def update(self, student_id: int, student: Dict[str, str]) -> dict:
        return self._call(
            "PUT",
            f"/students/{student_id}",
            resource="student",
            resource_id=student_id,
            json=student,
        )

    def delete(self, student_id: int) -> bool:
        self._call(
            "DELETE",
            f"/students/{student_id}",
            resource="student",
            resource_id=student_id,
        )
        return True

    # --------------------
    # Plumbing
    # --------------------
    def _call(
        self,
        method: str,
        path: str,
        resource: str,
        resource_id: Any = None,
        json: Any = None,
    ) -> Any:
        headers = with_auth_header(self.storage, {"Accept": "application/json"})

        self.loading.start(resource, resource_id)
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, path, exc)
            raise self._fail(None, None) from exc
        finally:
            self.loading.end(resource, resource_id)

        if not response.ok:
            raise self._fail(response.status_code, _parse_body(response))
        if response.status_code == 204 or not response.content:
            return None
        return _parse_body(response)

    def _fail(self, status_code: Optional[int], body: Any) -> ApiError:
        message = describe_error(status_code, body)
        self.notify(message)
        return ApiError(message, status_code, field_errors_from(body))
