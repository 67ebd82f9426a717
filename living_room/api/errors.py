"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module traduit les erreurs du domaine, les erreurs de validation FastAPI et les échecs SQLAlchemy
non classifiés en réponses JSON `{code, message, trace_id, details?}`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from living_room.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_UNAUTHORIZED,
)
from living_room.domain.errors import DomainError

log = structlog.get_logger(__name__)

ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    500: "INTERNAL_ERROR",
}


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
        headers=headers,
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers or request state."""
    trace_id = request.headers.get("X-Request-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "trace_id", None)


def _auth_headers(status_code: int) -> dict[str, str] | None:
    return {"WWW-Authenticate": "Bearer"} if status_code == HTTP_UNAUTHORIZED else None


def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle domain errors with their own status and code."""
    trace_id = extract_trace_id(request)
    if exc.status_code >= HTTP_INTERNAL_SERVER_ERROR:
        log.error("domain_error", code=exc.code, error_message=exc.message, trace_id=trace_id)
    else:
        log.info("domain_error", code=exc.code, status_code=exc.status_code, trace_id=trace_id)
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=trace_id,
        details=exc.details,
        headers=_auth_headers(exc.status_code),
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/path validation failures as 400 instead of 422."""
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return create_error_response(
        status_code=HTTP_BAD_REQUEST,
        code="VALIDATION_ERROR",
        message="invalid request",
        trace_id=extract_trace_id(request),
        details={"errors": errors},
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    code = ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    headers = dict(exc.headers or {}) or _auth_headers(exc.status_code)
    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
        headers=headers,
    )


def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unclassified persistence failure: opaque 500, details only in logs."""
    trace_id = extract_trace_id(request)
    log.error("store_failure", error_type=type(exc).__name__, trace_id=trace_id, exc_info=exc)
    return create_error_response(
        status_code=HTTP_INTERNAL_SERVER_ERROR,
        code="STORE_FAILURE",
        message="storage error",
        trace_id=trace_id,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Installe les gestionnaires d'erreurs sur l'application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_store_error)
