"""In-memory task store shared by all request handlers.

Tasks live in one ordered list guarded by a single re-entrant lock. Each
public method takes the lock itself; handlers additionally hold it through
``locked()`` across a mutation and the render that consumes its result, so a
fragment never reflects state a concurrent writer has already replaced.

Stored tasks are frozen dataclasses. Mutations swap in a new instance at the
same position, so every task handed out is a snapshot the caller cannot use
to change the store.

Nothing here logs: callers may still hold the lock when a method returns,
so handlers log after they release it.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum, StrEnum

from htmx_todo.state.ids import IdAllocator


class View(StrEnum):
    """Which tasks a listing includes. Values are the filter names."""

    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"


@dataclass(frozen=True, slots=True)
class Task:
    """A single todo entry."""

    id: int
    text: str
    done: bool = False
    editing: bool = False
    """Per-response flag for the edit input; never set on a stored task."""


class UpdateStatus(Enum):
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class UpdateResult:
    """Outcome of TaskStore.update()."""

    status: UpdateStatus
    task: Task | None = None


def is_blank(text: str) -> bool:
    return not text.strip()


class TaskStore:
    """Ordered, thread-safe collection of tasks.

    Example:
        >>> store = TaskStore(IdAllocator())
        >>> store.add("buy milk")
        Task(id=0, text='buy milk', done=False, editing=False)
        >>> store.toggle(0).done
        True
        >>> store.count_active()
        0
    """

    def __init__(self, ids: IdAllocator) -> None:
        self._ids = ids
        self._tasks: list[Task] = []
        self._lock = threading.RLock()

    @property
    def ids(self) -> IdAllocator:
        return self._ids

    @contextmanager
    def locked(self) -> Iterator["TaskStore"]:
        """Hold the store's exclusive lock for the duration of the block.

        The lock is re-entrant, so store methods can be called inside.
        """
        with self._lock:
            yield self

    def _index(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ── mutations ──────────────────────────────────────────────────

    def add(self, text: str) -> Task | None:
        """Append a new task.

        Returns:
            The new task, or None if the text is blank (nothing is stored
            and no id is consumed).
        """
        if is_blank(text):
            return None
        with self._lock:
            task = Task(id=self._ids.next(), text=text)
            self._tasks.append(task)
        return task

    def toggle(self, task_id: int) -> Task | None:
        """Flip a task's done flag. Returns None if the id is unknown."""
        with self._lock:
            index = self._index(task_id)
            if index is None:
                return None
            task = replace(self._tasks[index], done=not self._tasks[index].done)
            self._tasks[index] = task
        return task

    def begin_edit(self, task_id: int) -> Task | None:
        """Return an editing copy of a task without touching the stored one.

        Nothing is persisted, so concurrent edit requests for the same or
        different tasks never conflict.
        """
        with self._lock:
            index = self._index(task_id)
            if index is None:
                return None
            return replace(self._tasks[index], editing=True)

    def update(self, task_id: int, text: str) -> UpdateResult:
        """Replace a task's text; blank text deletes the task instead."""
        with self._lock:
            index = self._index(task_id)
            if index is None:
                return UpdateResult(UpdateStatus.NOT_FOUND)
            if is_blank(text):
                del self._tasks[index]
                return UpdateResult(UpdateStatus.DELETED)
            task = replace(self._tasks[index], text=text)
            self._tasks[index] = task
        return UpdateResult(UpdateStatus.UPDATED, task)

    def remove(self, task_id: int) -> bool:
        """Delete a task.

        Returns:
            True if a task was removed, False if the id was unknown.
        """
        with self._lock:
            index = self._index(task_id)
            if index is None:
                return False
            del self._tasks[index]
        return True

    def clear(self) -> None:
        """Drop every task. Only a session reset calls this."""
        with self._lock:
            self._tasks.clear()

    # ── reads ──────────────────────────────────────────────────────

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            index = self._index(task_id)
            return None if index is None else self._tasks[index]

    def list(self, view: View = View.ALL) -> list[Task]:
        """Tasks visible in a view, in insertion order."""
        with self._lock:
            if view is View.ACTIVE:
                return [t for t in self._tasks if not t.done]
            if view is View.COMPLETED:
                return [t for t in self._tasks if t.done]
            return list(self._tasks)

    def count_active(self) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if not t.done)

    def has_completed(self) -> bool:
        with self._lock:
            return any(t.done for t in self._tasks)

    def all_done(self) -> bool:
        """True iff there is at least one task and every task is done."""
        with self._lock:
            return bool(self._tasks) and all(t.done for t in self._tasks)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._tasks

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
