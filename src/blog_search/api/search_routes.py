"""
Search Routes

Each request is one input event from the search box: the query goes
through `SearchController.on_input`, and the response carries the
resulting results list.

Handlers are `async def` so they run on the event loop; input events
against the shared view never interleave.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse

from .dependencies import get_search_controller
from .models import SearchResponse, SearchResultItem
from ..config import settings
from ..search.controller import SearchController, SearchState

router = APIRouter(prefix="/search", tags=["search"])

UNAVAILABLE_NOTICE = "Search is currently unavailable."


def _notice_for(controller: SearchController) -> Optional[str]:
    if settings.show_unavailable_notice and controller.state is SearchState.FAILED:
        return UNAVAILABLE_NOTICE
    return None


@router.get(
    "",
    response_model=SearchResponse,
    summary="Fuzzy search over the site index",
    status_code=status.HTTP_200_OK,
)
async def search(
    controller: Annotated[SearchController, Depends(get_search_controller)],
    q: Annotated[str, Query()] = "",
) -> SearchResponse:
    """
    Run one search input event.

    Parameters
    ----------
    q : str
        Raw contents of the search box. Short queries clear the list.

    Returns
    -------
    SearchResponse
        Ranked hits for this query (None if search was not ready) and the
        rendered results list.
    """
    results = controller.on_input(q)

    return SearchResponse(
        state=controller.state.value,
        query=q,
        results=(
            None if results is None
            else [
                SearchResultItem.from_hit(hit, controller.options.include_score)
                for hit in results
            ]
        ),
        html=controller.view.to_html(),
        notice=_notice_for(controller),
    )


@router.get(
    "/fragment",
    response_class=HTMLResponse,
    summary="Rendered results list for in-page swapping",
)
async def search_fragment(
    controller: Annotated[SearchController, Depends(get_search_controller)],
    q: Annotated[str, Query()] = "",
) -> HTMLResponse:
    controller.on_input(q)
    return HTMLResponse(controller.view.to_html())
