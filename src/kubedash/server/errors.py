"""Exception to HTTP response mapping.

Every error body has the shape ``{"error": "<message>", "code": "<code>"}``,
optionally with ``details``.
"""

from __future__ import annotations

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..app_services.errors import NotFoundError
from ..kube.kubectl import KubectlError
from ..util.log import Log
from .schemas import ErrorResponse

log = Log.create({"service": "server.errors"})


def _request_id(request: Request) -> str | None:
    rid = getattr(request.state, "request_id", None)
    return rid if isinstance(rid, str) and rid else None


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, details=details)
    headers = {"X-Request-ID": rid} if (rid := _request_id(request)) else None
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status_code, headers=headers)


async def _bad_request(request: Request, exc: ValueError) -> JSONResponse:
    return error_response(request, 400, "bad_request", str(exc))


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(request, 404, "not_found", str(exc))


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "not_found" if exc.status_code == 404 else "http_error"
    return error_response(request, exc.status_code, code, str(exc.detail))


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {"errors": jsonable_encoder(exc.errors())}
    return error_response(request, 422, "validation_error", "Request validation failed", details)


async def _kubectl_failed(request: Request, exc: KubectlError) -> JSONResponse:
    log.error(
        "kubectl command failed",
        {"request_id": _request_id(request), "path": request.url.path, "argv": exc.argv, "returncode": exc.returncode, "error": exc},
    )
    return error_response(request, 500, "kubectl_error", str(exc))


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "route failed",
        {
            "request_id": _request_id(request),
            "method": request.method,
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error": exc,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )
    return error_response(request, 500, "internal_error", str(exc) or type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValueError, _bad_request)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, _not_found)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _invalid_request)  # type: ignore[arg-type]
    app.add_exception_handler(KubectlError, _kubectl_failed)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unexpected)
