"""HTTP server for the mock.

- Wide-open CORS on every response; every OPTIONS request is answered 200.
- Unexpected handler exceptions are logged and rendered as a JSON 500, never
  as a framework error page.
- Each app instance owns its own :class:`MockStateStore`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import Settings, load_settings
from .errors import error_from_exception
from .headers import build_request_context
from .routes import describe_routes, register_known_routes
from .state import MockStateStore


log = logging.getLogger("library_mock.server")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, org-id",
}


@asynccontextmanager
async def _lifespan(app: FastAPI):
    for line in describe_routes():
        log.info("route %s", line)
    yield


def create_app(store: MockStateStore | None = None, settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Library Mock Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=_lifespan,
    )

    app.state.store = store if store is not None else MockStateStore()  # type: ignore[attr-defined]
    app.state.settings = settings if settings is not None else load_settings()  # type: ignore[attr-defined]

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Attach context/store; short-circuit OPTIONS; contain unexpected errors.

        Every response carries the open CORS headers, with or without an Origin.
        """

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        request.state.ctx = build_request_context(request.headers)
        request.state.store = app.state.store  # type: ignore[attr-defined]
        request.state.settings = app.state.settings  # type: ignore[attr-defined]
        try:
            response = await call_next(request)
        except Exception as exc:  # noqa: BLE001
            log.exception("unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(error_from_exception(exc), status_code=500)
        response.headers.update(CORS_HEADERS)
        return response

    # Added last so it wraps the guard: browser preflights get CORS headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_known_routes(app)
    return app
