"""Pytest fixtures for htmx-todo tests."""

import logging
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from htmx_todo.foundation.config import TodoConfig
from htmx_todo.interface.server.main import create_app
from htmx_todo.state.app_state import AppState
from htmx_todo.state.ids import IdAllocator
from htmx_todo.state.tasks import TaskStore


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FrozenClock:
    """A clock fixed at 2026-01-01 12:00:00 UTC."""
    return FrozenClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def ids() -> IdAllocator:
    return IdAllocator()


@pytest.fixture
def store(ids: IdAllocator) -> TaskStore:
    return TaskStore(ids)


@pytest.fixture
def state(clock: FrozenClock) -> AppState:
    """Fresh application state on the frozen clock."""
    return AppState.create(TodoConfig(), clock=clock)


@pytest.fixture
def app(state: AppState) -> FastAPI:
    return create_app(state=state)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client for the server."""
    return TestClient(app)


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
