"""
Search Controller

Bridges user input, the fetched search index, the fuzzy matcher and the
rendered results view.

State Machine
-------------
    UNINITIALIZED -> LOADING -> READY
                             -> FAILED

- `initialize()` performs the only transition out of UNINITIALIZED.
- READY and FAILED are terminal; there is no retry.
- Input received before READY is ignored, not queued.

The matcher handle is Optional: every query path branches on it, so
"search unavailable" is an explicit state rather than a crash.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.errors import (
    SearchIndexError,
    SearchStateError,
    SearchUnavailableError,
)
from .engine import FuzzyMatcher
from .models import MatchOptions, QueryResult
from .view import ResultsView, build_items

logger = logging.getLogger("search.controller")


class SearchState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class IndexSource(Protocol):
    async def fetch(self): ...


@dataclass(frozen=True)
class InitResult:
    """
    Outcome of `SearchController.initialize()`.

    The caller decides whether a failure is shown to users.
    """

    state: SearchState
    error: Optional[SearchIndexError] = None
    record_count: int = 0

    @property
    def ok(self) -> bool:
        return self.state is SearchState.READY


class SearchController:
    """
    Orchestrates index loading, querying and rendering for one results view.
    """

    def __init__(
        self,
        source: IndexSource,
        view: ResultsView,
        options: Optional[MatchOptions] = None,
        short_query_length: int = 2,
    ) -> None:
        """
        Parameters
        ----------
        source : IndexSource
            Anything with an async `fetch()` returning SearchRecords,
            typically a SearchIndexClient.

        view : ResultsView
            The results container to render into. Required.

        options : Optional[MatchOptions]
            Matcher configuration; defaults to MatchOptions().

        short_query_length : int
            Queries with at most this many characters clear the view.
        """
        if view is None:
            raise ValueError("SearchController requires a results view.")

        self._source = source
        self._view = view
        self._options = options or MatchOptions()
        self._short_query_length = short_query_length

        self._state = SearchState.UNINITIALIZED
        self._matcher: Optional[FuzzyMatcher] = None
        self._error: Optional[SearchIndexError] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def view(self) -> ResultsView:
        return self._view

    @property
    def options(self) -> MatchOptions:
        return self._options

    @property
    def error(self) -> Optional[SearchIndexError]:
        return self._error

    @property
    def is_ready(self) -> bool:
        return self._matcher is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> InitResult:
        """
        Fetch the index and build the matcher. May only be called once.

        Index errors are logged and reported in the returned InitResult;
        they are never raised.
        """
        if self._state is not SearchState.UNINITIALIZED:
            raise SearchStateError(
                f"initialize() called in state {self._state.value}"
            )

        self._state = SearchState.LOADING

        try:
            records = await self._source.fetch()
        except SearchIndexError as exc:
            logger.error("Error fetching search index: %s", exc, exc_info=exc)
            self._error = exc
            self._state = SearchState.FAILED
            return InitResult(state=self._state, error=exc)
        except Exception:
            self._state = SearchState.FAILED
            raise

        self._matcher = FuzzyMatcher(records, self._options)
        self._state = SearchState.READY

        logger.info("Search index loaded with %d records", len(self._matcher))
        return InitResult(state=self._state, record_count=len(self._matcher))

    # ------------------------------------------------------------------
    # Input / Query / Render
    # ------------------------------------------------------------------

    def on_input(self, raw_query: str) -> Optional[QueryResult]:
        """
        Handle one input event from the search box.

        Returns
        -------
        Optional[QueryResult]
            None when search is not ready (the view is left untouched),
            an empty list when the query was too short (the view is
            cleared), otherwise the rendered results.
        """
        if self._matcher is None:
            logger.debug("Ignoring search input in state %s", self._state.value)
            return None

        if len(raw_query) <= self._short_query_length:
            self._view.clear()
            return []

        results = self.query(raw_query)
        self.render(results)
        return results

    def query(self, query: str) -> QueryResult:
        if self._matcher is None:
            raise SearchUnavailableError(
                f"Search is not ready (state: {self._state.value})"
            )
        return self._matcher.search(query)

    def render(self, results: QueryResult) -> None:
        self._view.replace(build_items(results))
