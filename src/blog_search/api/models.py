"""
API Models

Pydantic response models for the search and health endpoints.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..search.models import SearchHit


SearchStateName = Literal["uninitialized", "loading", "ready", "failed"]


class SearchResultItem(BaseModel):
    """
    One ranked hit as returned to API clients.
    """
    title: str
    permalink: str = Field(..., min_length=1)
    score: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_hit(cls, hit: SearchHit, include_score: bool = True) -> "SearchResultItem":
        return cls(
            title=hit.record.title or "",
            permalink=hit.record.permalink,
            score=hit.score if include_score else None,
        )


class SearchResponse(BaseModel):
    """
    Result of one search input event.

    `results` is None when the input was ignored because search is not
    ready; `html` is always the current results list.
    """
    state: SearchStateName
    query: str
    results: Optional[List[SearchResultItem]] = None
    html: str
    notice: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    search: SearchStateName

    model_config = ConfigDict(extra="forbid")
