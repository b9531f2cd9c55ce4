"""Shared mutable state: tasks, filters, id allocation, and sessions."""

from htmx_todo.state.app_state import AppState
from htmx_todo.state.filters import (
    DEFAULT_FILTERS,
    Filter,
    FilterState,
    selected_of,
    update_selected,
)
from htmx_todo.state.ids import IdAllocator
from htmx_todo.state.session import (
    Session,
    SessionGate,
    SessionStatus,
    generate_token,
    parse_expiry,
)
from htmx_todo.state.tasks import Task, TaskStore, UpdateResult, UpdateStatus, View

__all__ = [
    "AppState",
    "DEFAULT_FILTERS",
    "Filter",
    "FilterState",
    "IdAllocator",
    "Session",
    "SessionGate",
    "SessionStatus",
    "Task",
    "TaskStore",
    "UpdateResult",
    "UpdateStatus",
    "View",
    "generate_token",
    "parse_expiry",
    "selected_of",
    "update_selected",
]
