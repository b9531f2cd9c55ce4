"""Application state built once at startup and injected into every handler."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from htmx_todo.foundation.config import TodoConfig
from htmx_todo.state.filters import FilterState
from htmx_todo.state.ids import IdAllocator
from htmx_todo.state.session import SessionGate, utc_now
from htmx_todo.state.tasks import TaskStore


@dataclass(slots=True)
class AppState:
    """Everything a request handler may touch.

    Lock discipline: the task store and session resets share the store's
    lock; filters have their own reader/writer lock; no handler holds both.
    """

    config: TodoConfig
    ids: IdAllocator
    tasks: TaskStore
    filters: FilterState
    gate: SessionGate

    @classmethod
    def create(
        cls,
        config: TodoConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> "AppState":
        """Wire up a fresh, empty state."""
        config = config or TodoConfig()
        ids = IdAllocator()
        tasks = TaskStore(ids)
        return cls(
            config=config,
            ids=ids,
            tasks=tasks,
            filters=FilterState(),
            gate=SessionGate(tasks, ids, config.session, clock=clock),
        )
