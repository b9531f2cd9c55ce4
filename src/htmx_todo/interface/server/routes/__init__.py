"""Route modules for the htmx-todo server.

Each module defines an APIRouter for one concern:
- todos: task mutations and single-task reads
- views: full page (session gate), counts, and derived toggles
- filters: URL-fragment filter selection
- misc: health, learn.json
"""

from htmx_todo.interface.server.routes.filters import router as filters_router
from htmx_todo.interface.server.routes.misc import router as misc_router
from htmx_todo.interface.server.routes.todos import router as todos_router
from htmx_todo.interface.server.routes.views import router as views_router

__all__ = [
    "filters_router",
    "misc_router",
    "todos_router",
    "views_router",
]
