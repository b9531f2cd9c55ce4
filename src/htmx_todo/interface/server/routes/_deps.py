"""Shared request plumbing: state injection and query parameter parsing."""

from fastapi import Request

from htmx_todo.foundation.errors import invalid_identifier, missing_parameter
from htmx_todo.interface.server.render import Renderer
from htmx_todo.state.app_state import AppState

MAX_TASK_ID = 2**32 - 1

# Routes dispatch on path alone; the verb htmx happens to send is not checked
ANY_METHOD = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def get_state(request: Request) -> AppState:
    return request.app.state.todo


def get_renderer(request: Request) -> Renderer:
    return request.app.state.renderer


def require(value: str | None, parameter: str) -> str:
    """Return a required query parameter or raise a 400-class error."""
    if value is None:
        raise missing_parameter(parameter)
    return value


def parse_id(value: str | None, parameter: str = "id") -> int:
    """Parse a task id: plain ASCII digits within unsigned 32-bit range.

    Raises:
        TodoError: MISSING_PARAMETER or INVALID_IDENTIFIER.
    """
    raw = require(value, parameter)
    if not (raw.isascii() and raw.isdigit()):
        raise invalid_identifier(parameter, raw)
    task_id = int(raw)
    if task_id > MAX_TASK_ID:
        raise invalid_identifier(parameter, raw)
    return task_id
