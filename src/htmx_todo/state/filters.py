"""View filters mirrored from the browser's URL fragment.

The three filters never change in number; only which one is selected moves.
The server's selection is a cache of the last value the client reported, not
a source of truth.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from htmx_todo.foundation.threading import ReadWriteLock
from htmx_todo.state.tasks import View

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Filter:
    """One entry of the filter bar."""

    url: str
    name: str
    selected: bool = False


DEFAULT_FILTERS: tuple[Filter, ...] = (
    Filter(url="#/", name=View.ALL.value, selected=True),
    Filter(url="#/active", name=View.ACTIVE.value),
    Filter(url="#/completed", name=View.COMPLETED.value),
)

DEFAULT_NAME = View.ALL.value


def update_selected(
    filters: Sequence[Filter],
    prop: Callable[[Filter], str],
    value: str,
) -> tuple[Filter, ...]:
    """Select the filters whose property equals value, deselect the rest.

    Falls back to the default filter when nothing matches, so the result
    always has exactly one selected entry.
    """
    updated = tuple(replace(f, selected=prop(f) == value) for f in filters)
    if not any(f.selected for f in updated):
        updated = tuple(replace(f, selected=f.name == DEFAULT_NAME) for f in filters)
    return updated


class FilterState:
    """Thread-safe holder of the filter bar selection.

    Reads share a reader/writer lock; a selection change takes the write
    side and replaces the whole tuple in one assignment.

    Example:
        >>> state = FilterState()
        >>> state.select("Active")
        >>> state.selected_name()
        'Active'
        >>> state.select("nonsense")
        >>> state.selected_name()
        'All'
    """

    def __init__(self, filters: Sequence[Filter] = DEFAULT_FILTERS) -> None:
        self._filters = update_selected(
            filters, lambda f: f.name, selected_of(filters)
        )
        self._lock = ReadWriteLock()

    def select(self, name: str) -> None:
        """Select by exact, case-sensitive filter name."""
        with self._lock.write():
            self._filters = update_selected(self._filters, lambda f: f.name, name)
        logger.debug("Selected filter %r", name)

    def select_by_url(self, url: str) -> None:
        """Select by URL fragment such as '#/active'. Empty means All."""
        with self._lock.write():
            self._filters = update_selected(self._filters, lambda f: f.url, url or "#/")
        logger.debug("Selected filter by url %r", url)

    def selected_name(self) -> str:
        with self._lock.read():
            return selected_of(self._filters)

    def list(self) -> tuple[Filter, ...]:
        """All filters in fixed order All, Active, Completed."""
        with self._lock.read():
            return self._filters


def selected_of(filters: Sequence[Filter]) -> str:
    """Name of the selected filter, 'All' if somehow none is."""
    for f in filters:
        if f.selected:
            return f.name
    return DEFAULT_NAME
