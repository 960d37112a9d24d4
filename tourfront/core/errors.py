"""Error types and API error envelope handler registration."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tourfront.schemas.error import ErrorDetail
from tourfront.schemas.error import ErrorObject
from tourfront.schemas.error import ErrorResponse
from tourfront.schemas.error import NormalizedError


class APIError(Exception):
    """Base application exception for explicit API error responses."""

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Sequence[ErrorDetail] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = list(details) if details else None


class MethodNotAllowedError(APIError):
    """Convenience exception for unsupported HTTP methods."""

    def __init__(self, *, message: str = "Method not allowed") -> None:
        super().__init__(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            code="method_not_allowed",
            message=message,
        )


class ApiRequestError(RuntimeError):
    """Raised when a backend call failed; carries the normalized failure.

    The original exception (if any) is kept on ``failure`` and is normally also
    the ``__cause__`` because callers raise this error ``from`` it.
    """

    def __init__(self, normalized: NormalizedError, *, failure: BaseException | None = None) -> None:
        super().__init__(normalized.message)
        self.normalized = normalized
        self.failure = failure

    @property
    def status_code(self) -> int | None:
        return self.normalized.status

    @property
    def code(self) -> str | None:
        return self.normalized.code

    @property
    def validation_errors(self) -> dict[str, str] | None:
        return self.normalized.validation_errors


class UnknownFieldError(LookupError):
    """Raised by a field handler that does not own the reported field."""


def _build_error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: Sequence[ErrorDetail] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(error=ErrorObject(code=code, message=message, details=list(details) if details else None))
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


def _http_error_code(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return "not_found"
    if status_code in (status.HTTP_400_BAD_REQUEST, 422):
        return "validation_error"
    if status_code == status.HTTP_401_UNAUTHORIZED:
        return "unauthorized"
    if status_code == status.HTTP_403_FORBIDDEN:
        return "forbidden"
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return "method_not_allowed"
    if status_code == status.HTTP_409_CONFLICT:
        return "conflict"
    if status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        return "rate_limited"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return "internal_error"
    return "bad_request"


def _validation_details(validation_errors: Mapping[str, str] | None) -> list[ErrorDetail]:
    if not validation_errors:
        return []
    return [ErrorDetail(field=field, issue=message) for field, message in validation_errors.items()]


def _upstream_status(normalized: NormalizedError) -> int:
    if normalized.status is not None and 400 <= normalized.status < 600:
        return normalized.status
    return status.HTTP_502_BAD_GATEWAY


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the shared error envelope."""

    message = str(exc.detail) if isinstance(exc.detail, str) and exc.detail else "Request failed"
    return _build_error_response(
        status_code=exc.status_code,
        code=_http_error_code(exc.status_code),
        message=message,
    )


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Return explicit errors in the shared envelope."""

    return _build_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def api_request_error_handler(_: Request, exc: ApiRequestError) -> JSONResponse:
    """Render a propagated backend failure with its field details."""

    normalized = exc.normalized
    status_code = _upstream_status(normalized)
    return _build_error_response(
        status_code=status_code,
        code=normalized.code or _http_error_code(status_code),
        message=normalized.message,
        details=_validation_details(normalized.validation_errors),
    )


async def unhandled_exception_handler(_: Request, __: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    return _build_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="internal_error",
        message="Internal server error",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ApiRequestError, api_request_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
