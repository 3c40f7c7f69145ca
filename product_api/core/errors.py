"""
Error taxonomy and problem-details (RFC 7807) rendering.

Handlers and repositories raise ``ApiError`` tagged with an ``ErrorKind``.
Framework failures (request validation, unknown routes, unexpected
exceptions) are converted into the same type, so a single function decides
the status, title and body of every error response.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Any, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api.core.logging import get_logger

logger = get_logger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"

MALFORMED_DETAIL = "Request body is not readable or malformed"
FIELD_VALIDATION_DETAIL = "Request validation failed. See 'errors' for details."
INTERNAL_DETAIL = "An unexpected error occurred. Please try again later."


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    FIELD_VALIDATION = "field_validation"
    MALFORMED_INPUT = "malformed_input"
    INTERNAL = "internal"


# kind -> (title, status)
PROBLEM_TYPES: dict[ErrorKind, tuple[str, int]] = {
    ErrorKind.NOT_FOUND: ("Resource Not Found", HTTPStatus.NOT_FOUND),
    ErrorKind.VALIDATION: ("Validation Error", HTTPStatus.UNPROCESSABLE_ENTITY),
    ErrorKind.BAD_REQUEST: ("Bad Request", HTTPStatus.BAD_REQUEST),
    ErrorKind.FIELD_VALIDATION: ("Validation Failed", HTTPStatus.BAD_REQUEST),
    ErrorKind.MALFORMED_INPUT: ("Malformed Request", HTTPStatus.BAD_REQUEST),
    ErrorKind.INTERNAL: ("Internal Server Error", HTTPStatus.INTERNAL_SERVER_ERROR),
}


class ApiError(Exception):
    """A failure that is reported to the caller as a problem response."""

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        errors: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.errors = dict(errors) if errors else None

    @property
    def title(self) -> str:
        return PROBLEM_TYPES[self.kind][0]

    @property
    def status(self) -> int:
        return int(PROBLEM_TYPES[self.kind][1])

    @classmethod
    def not_found(cls, resource: str, resource_id: Any) -> "ApiError":
        return cls(ErrorKind.NOT_FOUND, f"{resource} not found with id: {resource_id}")

    @classmethod
    def bad_request(cls, detail: str) -> "ApiError":
        return cls(ErrorKind.BAD_REQUEST, detail)

    @classmethod
    def validation(cls, detail: str) -> "ApiError":
        return cls(ErrorKind.VALIDATION, detail)

    @classmethod
    def field_validation(cls, errors: Mapping[str, str]) -> "ApiError":
        return cls(ErrorKind.FIELD_VALIDATION, FIELD_VALIDATION_DETAIL, errors)

    @classmethod
    def malformed_input(cls) -> "ApiError":
        return cls(ErrorKind.MALFORMED_INPUT, MALFORMED_DETAIL)

    @classmethod
    def internal(cls) -> "ApiError":
        return cls(ErrorKind.INTERNAL, INTERNAL_DETAIL)


class Problem(BaseModel):
    type: str = "about:blank"
    title: str
    status: int
    detail: str
    instance: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    errors: Optional[dict[str, str]] = None


def problem_response(request: Request, *, title: str, status: int, detail: str,
                     errors: Optional[dict[str, str]] = None) -> JSONResponse:
    body = Problem(
        title=title,
        status=status,
        detail=detail,
        instance=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def render_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return problem_response(
        request,
        title=exc.title,
        status=exc.status,
        detail=exc.detail,
        errors=exc.errors,
    )


def from_request_validation(exc: RequestValidationError) -> ApiError:
    """
    Classify FastAPI request validation errors.

    A body that could not be decoded, is missing, or is not a JSON object is
    malformed input. Everything else is a field failure keyed by the last
    element of the error location (``("body", "price")`` -> ``"price"``).
    """
    errors = exc.errors()
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if err.get("type") == "json_invalid" or loc == ("body",):
            return ApiError.malformed_input()

    fields: dict[str, str] = {}
    for err in errors:
        loc = err.get("loc", ())
        field = str(loc[-1]) if loc else "request"
        # First message per field wins
        fields.setdefault(field, err.get("msg", "Invalid value"))
    return ApiError.field_validation(fields)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.warning(
        "%s %s -> %s: %s",
        request.method,
        request.url.path,
        exc.kind.value,
        exc.detail,
        extra={"requestId": getattr(request.state, "request_id", None)},
    )
    return render_api_error(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await api_error_handler(request, from_request_validation(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing failures (unknown path, method not allowed) keep their status.
    logger.warning("%s %s -> HTTP %s", request.method, request.url.path, exc.status_code)
    response = problem_response(
        request,
        title=HTTPStatus(exc.status_code).phrase,
        status=exc.status_code,
        detail=str(exc.detail),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # No filtramos detalles internos al cliente; quedan en el log.
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        extra={"requestId": request_id},
    )
    response = render_api_error(request, ApiError.internal())
    # Rendered outside RequestIdMiddleware, so the header is set here.
    if request_id:
        response.headers["X-Request-Id"] = request_id
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
