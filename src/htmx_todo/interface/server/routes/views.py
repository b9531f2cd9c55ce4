"""Page and derived-view routes: the full page, counts, and toggles.

Derived values (all-done, has-completed, active count) are computed and
rendered under the same store lock hold, so the pair is atomic with respect
to writers.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from htmx_todo.interface.server.render import Renderer
from htmx_todo.interface.server.routes._deps import ANY_METHOD, get_renderer, get_state
from htmx_todo.state.app_state import AppState
from htmx_todo.state.filters import selected_of
from htmx_todo.state.session import Session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["views"])


def _set_session_cookies(response: Response, session: Session, state: AppState) -> None:
    config = state.gate.config
    response.set_cookie(
        config.cookie_name,
        session.token,
        max_age=config.max_age,
        httponly=True,
    )
    response.set_cookie(
        config.expiry_cookie_name,
        session.expiry_value,
        max_age=config.max_age,
        httponly=True,
    )


# ═══════════════════════════════════════════════════════════════
# PAGE
# ═══════════════════════════════════════════════════════════════


@router.api_route("/", methods=ANY_METHOD, response_class=HTMLResponse)
def index(
    request: Request,
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Full page. An absent or expired session resets all state first."""
    filters = state.filters.list()

    with state.tasks.locked() as store:
        session = state.gate.admit(request.cookies)
        body = renderer.page(
            title=state.config.server.title,
            tasks=store.list(),
            filters=filters,
            checked=store.all_done(),
            has_completed=store.has_completed(),
            selected=selected_of(filters),
        )

    response = HTMLResponse(body)
    if session is not None:
        logger.info("Session reset: tasks cleared, new session until %s", session.expiry_value)
        _set_session_cookies(response, session, state)
    return response


# ═══════════════════════════════════════════════════════════════
# DERIVED STATE
# ═══════════════════════════════════════════════════════════════


@router.api_route("/toggle-all", methods=ANY_METHOD)
def toggle_all(state: AppState = Depends(get_state)) -> PlainTextResponse:
    """'true' when every task is done (and there is at least one)."""
    return PlainTextResponse("true" if state.tasks.all_done() else "false")


@router.api_route("/completed", methods=ANY_METHOD, response_class=HTMLResponse)
def completed(
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    with state.tasks.locked() as store:
        body = renderer.clear_completed(store.has_completed())
    return HTMLResponse(body)


@router.api_route("/update-counts", methods=ANY_METHOD, response_class=HTMLResponse)
def update_counts(
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    with state.tasks.locked() as store:
        body = renderer.item_count(store.count_active())
    return HTMLResponse(body)


@router.api_route("/footer", methods=ANY_METHOD, response_class=HTMLResponse)
@router.api_route("/toggle-footer", methods=ANY_METHOD, response_class=HTMLResponse)
def footer(
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    filters = state.filters.list()
    with state.tasks.locked() as store:
        body = renderer.footer(store.count_active(), filters, store.has_completed())
    return HTMLResponse(body)


@router.api_route("/toggle-main", methods=ANY_METHOD, response_class=HTMLResponse)
def toggle_main(
    state: AppState = Depends(get_state),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    with state.tasks.locked() as store:
        body = renderer.toggle_main(store.all_done())
    return HTMLResponse(body)
