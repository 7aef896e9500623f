"""Standardized error response models and exception handlers."""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from modelscout.errors import (
    CatalogUnavailableError,
    InvalidScenarioError,
    ModelScoutError,
    NotFoundError,
    RemoteCallError,
    UnsupportedOutputModeError,
)

logger = logging.getLogger("modelscout.api.errors")


class ErrorResponse(BaseModel):
    type: str
    code: str
    message: str
    param: str | None = None
    trace_id: str | None = None

    model_config = {"json_schema_extra": {"example": {
        "type": "not_found",
        "code": "not_found",
        "message": "Model not found: gpt-9",
        "trace_id": "req_abc123",
    }}}


# exception class -> (status, error type)
_STATUS = {
    NotFoundError: (404, "not_found"),
    InvalidScenarioError: (400, "validation_error"),
    UnsupportedOutputModeError: (400, "validation_error"),
    CatalogUnavailableError: (503, "catalog_unavailable"),
    RemoteCallError: (502, "upstream_error"),
}


def error_json(
    status_code: int,
    error_type: str,
    code: str,
    message: str,
    param: str | None = None,
    trace_id: str | None = None,
) -> JSONResponse:
    trace_id = trace_id or f"req_{uuid.uuid4().hex[:12]}"
    body = ErrorResponse(type=error_type, code=code, message=message, param=param, trace_id=trace_id)
    return JSONResponse(
        status_code=status_code,
        content={"error": body.model_dump(exclude_none=True)},
    )


def _trace_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _count_error(request: Request, code: str) -> None:
    metrics = getattr(request.app.state, "metrics", None)
    if metrics:
        metrics.request_errors_total.labels(code=code).inc()


async def handle_domain_error(request: Request, exc: ModelScoutError) -> JSONResponse:
    status_code, error_type = _STATUS.get(type(exc), (500, "internal_error"))
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    _count_error(request, exc.code)

    param = None
    if isinstance(exc, UnsupportedOutputModeError):
        param = exc.selector
    return error_json(status_code, error_type, exc.code, str(exc), param=param, trace_id=_trace_id(request))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    message = first.get("msg", "Request payload validation failed.")
    _count_error(request, "invalid_payload")
    return error_json(
        400,
        "validation_error",
        "invalid_payload",
        message,
        param=".".join(loc) or None,
        trace_id=_trace_id(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ModelScoutError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
