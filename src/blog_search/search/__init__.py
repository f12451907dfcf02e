"""
Search Package

Fuzzy search over the site's generated JSON index: data models, the
rapidfuzz-backed matcher, the results view and the controller tying them
together.
"""

from .models import MatchKey, MatchOptions, QueryResult, SearchHit, SearchRecord
from .engine import FuzzyMatcher
from .view import ResultItem, ResultsView
from .controller import InitResult, SearchController, SearchState

__all__ = [
    "MatchKey",
    "MatchOptions",
    "QueryResult",
    "SearchHit",
    "SearchRecord",
    "FuzzyMatcher",
    "ResultItem",
    "ResultsView",
    "InitResult",
    "SearchController",
    "SearchState",
]
