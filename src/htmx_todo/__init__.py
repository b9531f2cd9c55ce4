"""htmx-todo - server-rendered TodoMVC.

Every action is handled on the server, which mutates a shared in-memory task
list and answers with an HTML fragment for htmx to splice into the page.
"""

from htmx_todo.foundation.errors import ErrorCode, TodoError
from htmx_todo.state import AppState, Filter, FilterState, IdAllocator, Task, TaskStore, View

__version__ = "0.1.0"

__all__ = [
    "AppState",
    "ErrorCode",
    "Filter",
    "FilterState",
    "IdAllocator",
    "Task",
    "TaskStore",
    "TodoError",
    "View",
    "__version__",
]
