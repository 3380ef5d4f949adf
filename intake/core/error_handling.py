"""Translate classified service failures into HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from intake.core.logging import get_logger
from intake.services.action_items.errors import (
    ActionItemNotFoundError,
    ActionValidationError,
    GuardViolationError,
)
from intake.services.action_items.validation import format_validation_issues

logger = get_logger(__name__)


def _validation_response(issues: list[dict[str, object]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "issues": issues},
    )


async def _handle_action_validation(_request: Request, exc: ActionValidationError) -> JSONResponse:
    return _validation_response(exc.issues)


async def _handle_request_validation(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return _validation_response(format_validation_issues(exc.errors()))


async def _handle_guard_violation(_request: Request, exc: GuardViolationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "guard": exc.guard},
    )


async def _handle_not_found(_request: Request, exc: ActionItemNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Action item not found"},
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled_error",
        extra={"method": request.method, "path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def install_error_handling(app: FastAPI) -> None:
    """Register the exception handlers that map service errors to status codes."""
    app.add_exception_handler(ActionValidationError, _handle_action_validation)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(GuardViolationError, _handle_guard_violation)  # type: ignore[arg-type]
    app.add_exception_handler(ActionItemNotFoundError, _handle_not_found)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unexpected)
