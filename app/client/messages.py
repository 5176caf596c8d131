"""User-facing messages for failed API calls."""

from typing import Any, Dict, Optional

NETWORK_MESSAGE = "Unable to reach the server. Check your connection and try again."
NOT_FOUND_MESSAGE = "Student not found."
CONFLICT_MESSAGE = "A student with this email already exists."
SERVER_MESSAGE = "The server encountered an error. Please try again later."
INVALID_MESSAGE = "The request was invalid."


class ApiError(Exception):
    """A failed API call, already translated for the user."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.field_errors = field_errors or {}


def field_errors_from(body: Any) -> Dict[str, str]:
    """Extract field -> message pairs from either error body style."""
    if not isinstance(body, dict):
        return {}
    if isinstance(body.get("fieldErrors"), dict):
        return {str(k): str(v) for k, v in body["fieldErrors"].items()}
    # FastAPI's stock 422 body: {"detail": [{"loc": [...], "msg": "..."}]}
    detail = body.get("detail")
    if isinstance(detail, list):
        return {
            str(item.get("loc", ["?"])[-1]): str(item.get("msg", ""))
            for item in detail
            if isinstance(item, dict)
        }
    return {}


def describe_error(status_code: Optional[int], body: Any = None) -> str:
    """One message per failure kind; ``status_code`` is None for network errors."""
    if status_code is None:
        return NETWORK_MESSAGE

    server_message = body.get("message") if isinstance(body, dict) else None

    if status_code in (400, 422):
        errors = field_errors_from(body)
        if errors:
            summary = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
            return f"Validation failed: {summary}"
        return server_message or INVALID_MESSAGE
    if status_code == 404:
        return server_message or NOT_FOUND_MESSAGE
    if status_code == 409:
        return server_message or CONFLICT_MESSAGE
    if status_code >= 500:
        return SERVER_MESSAGE
    return server_message or f"Request failed with status {status_code}"
