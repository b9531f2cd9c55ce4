"""FastAPI application for the htmx TodoMVC server.

Every user action is a small HTTP request answered with an HTML fragment the
browser splices into the page. Shared state lives in one AppState built here
and reached by handlers through ``request.app.state``.

Routes are organized into modules under htmx_todo/interface/server/routes/:
- todos: add, toggle, edit, update, remove, single-task reads
- views: full page with session gate, counts, derived toggles
- filters: set-hash / get-hash
- misc: health, learn.json

Failure mapping at the router boundary:
- TodoError: its HTTP status (400 for bad or unknown ids), empty body
- Unknown route or unroutable method: 404, plain text
- Anything else: 500, plain text, logged with traceback
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from htmx_todo import __version__
from htmx_todo.foundation.config import TodoConfig
from htmx_todo.foundation.errors import TodoError
from htmx_todo.interface.server.render import Renderer
from htmx_todo.interface.server.routes import (
    filters_router,
    misc_router,
    todos_router,
    views_router,
)
from htmx_todo.state.app_state import AppState

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "404 Not Found"
INTERNAL_ERROR_BODY = "500 Internal Server Error"


def create_app(
    *,
    config: TodoConfig | None = None,
    state: AppState | None = None,
    renderer: Renderer | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Configuration; ignored when state is given.
        state: Pre-built application state (tests inject one with a fixed clock).
        renderer: Fragment renderer. Defaults to the packaged templates.

    Returns:
        Configured FastAPI application.
    """
    state = state or AppState.create(config)

    app = FastAPI(
        title="htmx-todo",
        description="Server-rendered TodoMVC over htmx fragments",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.todo = state
    app.state.renderer = renderer or Renderer()

    app.include_router(views_router)
    app.include_router(todos_router)
    app.include_router(filters_router)
    app.include_router(misc_router)

    _install_error_handling(app)
    return app


def _install_error_handling(app: FastAPI) -> None:
    """Make sure no failure escapes a handler as anything but a response."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> Response:
        logger.debug("%s %s -> %s", request.method, request.url.path, exc)
        return Response(status_code=exc.http_status)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        # every route takes the common verbs, so an unroutable verb is a miss too
        if exc.status_code in (404, 405):
            return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.middleware("http")
    async def internal_error_boundary(request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)
