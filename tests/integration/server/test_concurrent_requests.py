"""Concurrent requests against one application instance."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from fastapi import FastAPI
from fastapi.testclient import TestClient

from htmx_todo.state.app_state import AppState


def _per_thread_client(app: FastAPI):
    local = threading.local()

    def get() -> TestClient:
        if not hasattr(local, "client"):
            local.client = TestClient(app)
        return local.client

    return get


class LockCheckingHandler(logging.Handler):
    """Records, for each log record, whether another thread could take the store lock."""

    def __init__(self, state: AppState) -> None:
        super().__init__(logging.DEBUG)
        self.state = state
        self.lock_free: list[tuple[str, bool]] = []

    def emit(self, record: logging.LogRecord) -> None:
        acquired = []

        def try_lock() -> None:
            ok = self.state.tasks._lock.acquire(timeout=0.5)
            if ok:
                self.state.tasks._lock.release()
            acquired.append(ok)

        other = threading.Thread(target=try_lock)
        other.start()
        other.join()
        self.lock_free.append((record.getMessage(), acquired[0]))


class TestConcurrentRequests:
    def test_concurrent_adds_get_unique_ids(self, app: FastAPI, state: AppState) -> None:
        client_for = _per_thread_client(app)

        def add(i: int) -> int:
            return client_for().get("/add-todo", params={"task": f"t{i}"}).status_code

        with ThreadPoolExecutor(max_workers=8) as pool:
            statuses = list(pool.map(add, range(50)))

        assert statuses == [200] * 50
        assert sorted(t.id for t in state.tasks.list()) == list(range(50))
        assert state.ids.peek() == 50

    def test_mixed_readers_and_writers(self, app: FastAPI, state: AppState) -> None:
        """Counts read mid-stream always parse and never exceed the total."""
        client_for = _per_thread_client(app)
        total = 40

        def work(i: int) -> int:
            client = client_for()
            if i % 2:
                client.get("/add-todo", params={"task": f"t{i}"})
                return -1
            client.get("/set-hash", params={"name": ("All", "Active", "Completed")[i % 3]})
            text = client.get("/update-counts").text
            return int(text.removeprefix("<strong>").split(" ")[0])

        with ThreadPoolExecutor(max_workers=8) as pool:
            counts = [c for c in pool.map(work, range(total)) if c >= 0]

        assert all(0 <= c <= total // 2 for c in counts)
        assert len(state.tasks) == total // 2
        assert state.filters.selected_name() in {"All", "Active", "Completed"}

    def test_handlers_log_outside_store_lock(self, client: TestClient, state: AppState) -> None:
        handler = LockCheckingHandler(state)
        logger = logging.getLogger("htmx_todo")
        previous = logger.level
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            client.get("/")
            client.get("/add-todo", params={"task": "a"})
            client.get("/toggle-todo", params={"id": "0"})
            client.get("/update-todo", params={"id": "0", "task": "b"})
            client.get("/remove-todo", params={"id": "0"})
        finally:
            logger.removeHandler(handler)
            logger.setLevel(previous)

        messages = [message for message, _ in handler.lock_free]
        assert any(m.startswith("Session reset") for m in messages)
        assert "Added task 0" in messages
        assert "Removed task 0" in messages
        assert all(free for _, free in handler.lock_free), handler.lock_free
