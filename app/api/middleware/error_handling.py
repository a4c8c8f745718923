# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches errors that happen while handling a request and turns them into consistent
# JSON error messages, without ever showing internal details to the caller.
#
# 🧪 Purpose (Technical Summary):
# FastAPI exception handlers. DomainError renders its own status and
# {status, code, message, details} body; request validation failures render 400
# VALIDATION_ERROR with per-field errors; anything else is logged with its traceback
# and rendered as 500 INTERNAL_ERROR.
#
# 🔗 Dependencies:
# - FastAPI (exception handlers, RequestValidationError)
# - app.shared.core.exceptions (DomainError, RequestValidationFailed)
#
# 🔄 Connected Modules / Calls From:
# - app/main.py (register_exception_handlers)

import logging
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.middleware.logging import get_request_id
from app.shared.core.exceptions import (
    DomainError,
    RequestValidationFailed,
    exception_to_dict,
    is_client_error,
)

logger = logging.getLogger(__name__)


def _field_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error entries to field, message and type."""
    field_errors = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field_errors.append({
            "field": ".".join(location) or None,
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type"),
        })
    return field_errors


def create_error_response(exc: DomainError, request: Request) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        exc: Domain error to render
        request: HTTP request (for the correlation header)

    Returns:
        JSON error response
    """
    response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
    response.headers["X-Error-Code"] = exc.error_code
    request_id = get_request_id(request)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if is_client_error(exc):
        logger.info(f"{exc.error_code} in {request.method} {request.url.path}")
    else:
        cause = exc.__cause__ or exc.details.get("originalError")
        logger.error(f"{exc.error_code} in {request.method} {request.url.path}: {cause}")
    return create_error_response(exc, request)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return create_error_response(RequestValidationFailed(_field_errors(exc.errors())), request)


async def pydantic_validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    # Commands built inside endpoints re-check their invariants
    return create_error_response(RequestValidationFailed(_field_errors(exc.errors())), request)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} in {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=exception_to_dict(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
