"""Miscellaneous routes: health and the TodoMVC learn sidebar stub."""

from typing import Any

from fastapi import APIRouter, Depends

from htmx_todo.interface.server.routes._deps import ANY_METHOD, get_state
from htmx_todo.interface.server.routes._models import HealthResponse
from htmx_todo.state.app_state import AppState

router = APIRouter(tags=["misc"])


@router.api_route("/health", methods=ANY_METHOD)
def health(state: AppState = Depends(get_state)) -> HealthResponse:
    """Health check."""
    return HealthResponse(
        status="healthy",
        tasks=len(state.tasks),
        next_id=state.ids.peek(),
    )


@router.api_route("/learn.json", methods=ANY_METHOD)
def learn() -> dict[str, Any]:
    """The TodoMVC base script asks for this; there is nothing to show."""
    return {}
