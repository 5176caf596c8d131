"""Typed domain errors and their translation into HTTP error responses.

The service layer raises the exceptions defined here and never touches HTTP.
``register_exception_handlers`` installs one handler per error family on the
FastAPI app; each of them resolves a status code and reason phrase and
renders the shared ``ErrorResponse`` body::

    {"timestamp": ..., "status": 404, "error": "Not Found",
     "message": "Student not found with id: 7", "path": "/students/7"}

``fieldErrors`` is only present for validation failures.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Dict, Optional, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from metrics import API_ERRORS
from schemas import ErrorResponse

logger = logging.getLogger(__name__)


class StudentRecordsError(Exception):
    """Base class for errors raised by the domain service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StudentNotFoundError(StudentRecordsError):
    """No student matches the requested id or email."""

    @classmethod
    def for_id(cls, student_id: int) -> "StudentNotFoundError":
        return cls(f"Student not found with id: {student_id}")

    @classmethod
    def for_email(cls, email: str) -> "StudentNotFoundError":
        return cls(f"Student not found with email: {email}")


class DuplicateEmailError(StudentRecordsError):
    """The email already belongs to another student."""

    def __init__(self, email: str):
        super().__init__(f"Student with email '{email}' already exists")
        self.email = email


class ValidationFailedError(StudentRecordsError):
    """One or more fields failed validation; all of them are reported."""

    def __init__(self, field_errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.field_errors = dict(field_errors)


# error kind -> (status code, reason phrase)
ERROR_TABLE: Dict[Type[StudentRecordsError], Tuple[int, str]] = {
    StudentNotFoundError: (404, "Not Found"),
    DuplicateEmailError: (409, "Conflict"),
    ValidationFailedError: (400, "Bad Request"),
}

UNEXPECTED = (500, "Internal Server Error")


def resolve_status(exc: Exception) -> Tuple[int, str]:
    """Find the table entry for ``exc``, walking up its class hierarchy."""
    for klass in type(exc).__mro__:
        if klass in ERROR_TABLE:
            return ERROR_TABLE[klass]
    return UNEXPECTED


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error: Optional[str] = None,
    field_errors: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render the shared error body."""
    API_ERRORS.labels(status=str(status_code)).inc()
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=error or HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
        field_errors=field_errors or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, by_alias=True, exclude_none=True),
        headers=headers,
    )


def _error_message(err: dict) -> str:
    # value errors raised by our validators carry the original exception in ctx
    ctx_error = (err.get("ctx") or {}).get("error")
    if err.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    msg = err.get("msg", "Invalid value")
    return msg[len("Value error, "):] if msg.startswith("Value error, ") else msg


def _is_email_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig if exc.orig is not None else exc).lower()
    return ("unique" in text or "duplicate" in text) and "email" in text


async def handle_domain_error(request: Request, exc: StudentRecordsError) -> JSONResponse:
    status_code, reason = resolve_status(exc)
    if status_code >= 500:
        logger.error("Unmapped domain error on %s: %s", request.url.path, exc)
    return error_response(
        request,
        status_code,
        exc.message,
        error=reason,
        field_errors=getattr(exc, "field_errors", None),
    )


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()

    for err in errors:
        if err.get("type") == "json_invalid":
            detail = (err.get("ctx") or {}).get("error", err.get("msg"))
            return error_response(request, 400, f"Malformed JSON request: {detail}")

    field_errors: Dict[str, str] = {}
    message = None
    for err in errors:
        loc = tuple(err.get("loc", ()))
        source = loc[0] if loc else "body"

        if source == "body" and len(loc) < 2:
            # the body itself is missing or is not a JSON object
            if err.get("type") == "missing":
                return error_response(request, 400, "Required request body is missing")
            return error_response(
                request, 400, f"Malformed JSON request: {err.get('msg')}"
            )

        field = str(loc[-1])
        if source in ("path", "query") and err.get("type") == "int_parsing":
            field_errors[field] = "Should be of type integer"
            message = message or f"{field} should be of type integer"
        else:
            field_errors.setdefault(field, _error_message(err))

    if message is None:
        message = "Validation failed for object 'studentRequest'"
    return await handle_domain_error(
        request, ValidationFailedError(field_errors, message)
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    # the unique index is the final word when two writers race past the pre-check
    if _is_email_unique_violation(exc):
        logger.warning("Unique email constraint hit on %s", request.url.path)
        return error_response(
            request, 409, "A student with this email already exists", error="Conflict"
        )
    logger.warning("Integrity violation on %s: %s", request.url.path, exc.orig)
    return error_response(request, 409, "Data integrity violation", error="Conflict")


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s", request.url.path)
    return error_response(
        request,
        500,
        "An error occurred while accessing the database",
        error="Database Error",
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error occurred on path %s", request.url.path)
    status_code, reason = UNEXPECTED
    return error_response(
        request, status_code, "An unexpected error occurred", error=reason
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every error handler on ``app``."""
    app.add_exception_handler(StudentRecordsError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
