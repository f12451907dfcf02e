from typing import Annotated

from fastapi import APIRouter, Depends

from .dependencies import get_search_controller
from .models import HealthResponse
from ..search.controller import SearchController

router = APIRouter(tags=["health"])

@router.get("/health", response_model=HealthResponse)
def health(
    controller: Annotated[SearchController, Depends(get_search_controller)],
) -> HealthResponse:
    return HealthResponse(search=controller.state.value)
