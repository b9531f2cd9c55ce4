"""Task routes: add, toggle, edit, update, remove, and single-task reads.

Each handler reads the selected filter first (filter read lock), then holds
the task store lock across its mutation and the render of the result.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse

from htmx_todo.foundation.errors import task_not_found
from htmx_todo.interface.server.render import Renderer
from htmx_todo.interface.server.routes._deps import (
    ANY_METHOD,
    get_renderer,
    get_state,
    parse_id,
    require,
)
from htmx_todo.interface.server.routes._models import TaskModel
from htmx_todo.state.app_state import AppState
from htmx_todo.state.tasks import UpdateStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])


# ═══════════════════════════════════════════════════════════════
# MUTATIONS
# ═══════════════════════════════════════════════════════════════


@router.api_route("/add-todo", methods=ANY_METHOD, response_class=HTMLResponse)
def add_todo(
    task: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Append a task. Blank text is ignored with an empty 200.

    The very first task is answered with the whole list so the client can
    populate an empty container; later tasks get just their own item.
    """
    text = require(task, "task")
    selected = state.filters.selected_name()

    with state.tasks.locked() as store:
        was_empty = store.is_empty()
        created = store.add(text)
        if created is None:
            return HTMLResponse("")
        if was_empty:
            body = renderer.todo_list(store.list(), selected)
        else:
            body = renderer.todo_item(created, selected)

    logger.debug("Added task %d", created.id)
    return HTMLResponse(body)


@router.api_route("/toggle-todo", methods=ANY_METHOD, response_class=HTMLResponse)
def toggle_todo(
    id: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    task_id = parse_id(id)
    selected = state.filters.selected_name()

    with state.tasks.locked() as store:
        toggled = store.toggle(task_id)
        if toggled is None:
            raise task_not_found(task_id)
        body = renderer.todo_item(toggled, selected)

    logger.debug("Toggled task %d to done=%s", task_id, toggled.done)
    return HTMLResponse(body)


@router.api_route("/edit-todo", methods=ANY_METHOD, response_class=HTMLResponse)
def edit_todo(
    id: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Edit input for a task, rendered from an editing copy."""
    task_id = parse_id(id)

    with state.tasks.locked() as store:
        editing = store.begin_edit(task_id)
        if editing is None:
            raise task_not_found(task_id)
        body = renderer.edit_todo(editing)

    return HTMLResponse(body)


@router.api_route("/update-todo", methods=ANY_METHOD, response_class=HTMLResponse)
def update_todo(
    id: str | None = Query(None),
    task: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Replace a task's text. Missing or blank text deletes the task."""
    task_id = parse_id(id)
    selected = state.filters.selected_name()

    with state.tasks.locked() as store:
        result = store.update(task_id, task or "")
        if result.status is UpdateStatus.NOT_FOUND:
            raise task_not_found(task_id)
        if result.status is UpdateStatus.DELETED:
            body = ""
        else:
            body = renderer.todo_item(result.task, selected)

    logger.debug("Task %d %s", task_id, result.status.value)
    return HTMLResponse(body)


@router.api_route("/remove-todo", methods=ANY_METHOD, response_class=HTMLResponse)
def remove_todo(
    id: str | None = Query(None),
    state: AppState = Depends(get_state),
) -> HTMLResponse:
    """Delete a task. Unknown ids are logged and still answered with 200."""
    task_id = parse_id(id)
    if state.tasks.remove(task_id):
        logger.debug("Removed task %d", task_id)
    else:
        logger.debug("Remove of unknown task %d ignored", task_id)
    return HTMLResponse("")


# ═══════════════════════════════════════════════════════════════
# READS
# ═══════════════════════════════════════════════════════════════


@router.api_route("/todo-item", methods=ANY_METHOD, response_class=HTMLResponse)
def todo_item(
    id: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    task_id = parse_id(id)
    selected = state.filters.selected_name()

    with state.tasks.locked() as store:
        found = store.get(task_id)
        if found is None:
            raise task_not_found(task_id)
        body = renderer.todo_item(found, selected)

    return HTMLResponse(body)


@router.api_route("/todo-list", methods=ANY_METHOD, response_class=HTMLResponse)
def todo_list(
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    selected = state.filters.selected_name()
    with state.tasks.locked() as store:
        body = renderer.todo_list(store.list(), selected)
    return HTMLResponse(body)


@router.api_route("/todo-json", methods=ANY_METHOD)
def todo_json(state: AppState = Depends(get_state)) -> JSONResponse:
    """Every task as a JSON array, in store order."""
    with state.tasks.locked() as store:
        payload = [
            TaskModel.from_task(t).model_dump(by_alias=True) for t in store.list()
        ]
    return JSONResponse(payload)
