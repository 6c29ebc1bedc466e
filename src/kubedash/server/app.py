"""FastAPI application factory."""

from __future__ import annotations

import secrets
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..runtime import AppContext
from ..util.log import Log
from .errors import register_error_handlers
from .routes import logs, restart, status, system
from .schemas import ErrorResponse

access = Log.create({"service": "server.access"})


def create_app(
    ctx: AppContext,
    *,
    manage_lifecycle: bool = True,
    access_log: bool = True,
) -> FastAPI:
    """Create the dashboard application bound to ``ctx``."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        await ctx.startup()
        try:
            yield
        finally:
            await ctx.shutdown()

    app = FastAPI(
        title="kubedash",
        version=__version__,
        lifespan=_lifespan if manage_lifecycle else None,
        responses={status: {"model": ErrorResponse} for status in (400, 404, 422, 500)},
    )
    app.state.ctx = ctx

    @app.middleware("http")
    async def _access_log(request: Request, call_next):
        rid = request.headers.get("x-request-id") or secrets.token_hex(8)
        request.state.request_id = rid
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers["X-Request-ID"] = rid
            return response
        finally:
            if access_log:
                emit = access.info if status < 500 else access.warn
                emit(
                    f"{request.method} {request.url.path} {status}",
                    {
                        "request_id": rid,
                        "query": request.url.query or None,
                        "client": request.client.host if request.client else None,
                        "ms": int((time.perf_counter() - started) * 1000),
                    },
                )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(status.router)
    app.include_router(logs.router)
    app.include_router(restart.router)
    # Static catch-all must stay last.
    app.include_router(system.router)
    return app
