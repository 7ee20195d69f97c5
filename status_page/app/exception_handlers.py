"""Global exception handlers for FastAPI application.

Every error leaves the service as an RFC 7807 ``application/problem+json``
document.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from status_page.core.exceptions import AppException
from status_page.core.schemas.error import (
    ProblemDetail,
    ValidationError,
    ValidationProblemDetail,
)

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _problem_response(
    request: Request,
    status_code: int,
    content: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type=PROBLEM_JSON,
        headers=headers,
    )


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create an RFC 7807 body; ``extra`` keys are merged at the top level."""
    problem = ProblemDetail(
        type=type_,
        title=title or ProblemDetail.default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )
    response_data = problem.model_dump(exclude_none=True)
    if extra:
        response_data.update(extra)
    return response_data


def _validation_errors(errors: list[Any]) -> list[ValidationError]:
    result = []
    for error in errors:
        value = error.get("input")
        result.append(
            ValidationError(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
                type=error["type"],
                value=value if isinstance(value, (str, int, float, bool, type(None))) else None,
            )
        )
    return result


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert ``AppException`` subclasses into problem responses."""
    logger.warning(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return _problem_response(
        request,
        exc.status_code,
        _create_problem_detail(
            status_code=exc.status_code,
            detail=exc.detail,
            type_=exc.type,
            title=exc.title,
            instance=exc.instance or request.url.path,
            extra=exc.extra,
        ),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request validation failures become 422 with field-level errors."""
    validation_errors = _validation_errors(list(exc.errors()))

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
            "fields": [e.field for e in validation_errors],
        },
    )

    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=request.url.path,
        errors=validation_errors,
    )
    return _problem_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, problem.model_dump(exclude_none=True)
    )


async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Pydantic errors raised outside request parsing (e.g. building a response)."""
    validation_errors = _validation_errors(list(exc.errors()))

    logger.warning(
        "Pydantic validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Data validation failed for {len(validation_errors)} field(s)",
        instance=request.url.path,
        errors=validation_errors,
    )
    return _problem_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, problem.model_dump(exclude_none=True)
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, return a generic 500."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )

    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        _create_problem_detail(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred while processing your request",
            type_="internal-error",
            title="Internal Server Error",
            instance=request.url.path,
        ),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all problem-detail handlers on ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers configured")
