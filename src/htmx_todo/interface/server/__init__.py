"""HTTP server for the htmx TodoMVC front end.

Usage:
    htmx-todo serve --open

Architecture:
    Browser (htmx) -> FastAPI route -> AppState (locked) -> Renderer -> fragment
"""

from htmx_todo.interface.server.main import create_app
from htmx_todo.interface.server.render import Renderer

__all__ = ["Renderer", "create_app"]
