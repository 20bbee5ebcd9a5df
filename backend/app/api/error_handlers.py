"""Error Handlers — global exception handlers for the BannerDesk API.

Invariants:
    - BannerDeskError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level details and the department/section
      ids taken from the URL, so a bad banner body is traceable to its section
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BannerDeskError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import BannerDeskError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register BannerDesk domain/infrastructure error handler."""

    @app.exception_handler(BannerDeskError)
    async def bannerdesk_error_handler(request: Request, exc: BannerDeskError):
        """Handle all BannerDesk domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"BannerDeskError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request body/path validation errors on tree endpoints."""
        body = _build_validation_error_response(request, exc)
        logger.warning(
            f"Validation error on {request.url.path}: "
            f"{[d['field'] for d in body['error']['details']]}",
            extra={
                "path": request.url.path,
                "department_id": body["error"]["context"]["department_id"],
                "section_id": body["error"]["context"]["section_id"],
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=body,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _path_id(request: Request, name: str) -> int | None:
    """Tree coordinate from the URL, when it parsed as an int."""
    value = request.path_params.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def _build_validation_error_response(
    request: Request, exc: RequestValidationError,
) -> dict:
    """Structured 400 envelope: field errors plus the tree coordinates addressed."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "context": {
                "department_id": _path_id(request, "department_id"),
                "section_id": _path_id(request, "section_id"),
                "path": request.url.path,
            },
            "details": [
                {
                    "location": e["loc"][0] if e["loc"] else None,
                    "field": ".".join(str(loc) for loc in e["loc"][1:]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
