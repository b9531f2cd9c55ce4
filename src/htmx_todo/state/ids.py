"""Task identifier allocation.

Ids are unique for the life of a session and never reused after deletion.
The counter is rewound to zero by a session reset and nowhere else.
"""

import threading


class IdAllocator:
    """Monotonic id source shared by every request handler.

    The increment is guarded by its own private lock, independent of the
    task store's lock, and the lock is never held across any other call.

    Example:
        >>> ids = IdAllocator()
        >>> ids.next(), ids.next()
        (0, 1)
        >>> ids.reset()
        >>> ids.next()
        0
    """

    __slots__ = ("_lock", "_next")

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._lock = threading.Lock()
        self._next = start

    def next(self) -> int:
        """Return the current value and advance the counter."""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def reset(self) -> None:
        """Rewind to zero.

        Callers must hold the task store lock so no add can allocate between
        clearing the store and rewinding the counter.
        """
        with self._lock:
            self._next = 0

    def peek(self) -> int:
        """The value the next call to next() will return."""
        with self._lock:
            return self._next
