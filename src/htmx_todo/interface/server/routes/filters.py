"""Filter routes: the client reports its URL fragment, the server mirrors it."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from htmx_todo.interface.server.render import Renderer
from htmx_todo.interface.server.routes._deps import ANY_METHOD, get_renderer, get_state
from htmx_todo.state.app_state import AppState

router = APIRouter(tags=["filters"])


def _apply(state: AppState, name: str | None, hash: str | None) -> None:
    if name is not None:
        state.filters.select(name)
    elif hash is not None:
        state.filters.select_by_url(hash)


@router.api_route("/set-hash", methods=ANY_METHOD, response_class=HTMLResponse)
def set_hash(
    name: str | None = Query(None),
    hash: str | None = Query(None),
    state: AppState = Depends(get_state),
) -> HTMLResponse:
    """Record the selection; the body is empty."""
    _apply(state, name, hash)
    return HTMLResponse("")


@router.api_route("/get-hash", methods=ANY_METHOD, response_class=HTMLResponse)
def get_hash(
    name: str | None = Query(None),
    hash: str | None = Query(None),
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Record the selection (by name or by URL fragment) and return the bar.

    Unknown names and fragments fall back to All.
    """
    _apply(state, name, hash)
    # list() hands back an immutable snapshot taken under the read lock
    return HTMLResponse(renderer.filter_bar(state.filters.list()))
