"""
Results View

In-memory model of the search results container (`<ul id="searchResults">`)
on the site's search page. The controller only ever replaces or clears the
whole list; the view serializes itself to the HTML fragment the page
swaps in.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .models import QueryResult


NO_RESULTS_TEXT = "No results found"
RESULT_ITEM_CLASS = "search-result-item"
NO_RESULTS_CLASS = "no-results"


@dataclass(frozen=True)
class ResultItem:
    """
    One `<li>` in the results list.

    `href` is None for the placeholder item, which renders as plain text.
    """

    text: str
    css_class: str
    href: Optional[str] = None

    def to_html(self) -> str:
        body = html.escape(self.text)
        if self.href is not None:
            body = f'<a href="{html.escape(self.href, quote=True)}">{body}</a>'
        return f'<li class="{self.css_class}">{body}</li>'


def build_items(results: QueryResult) -> List[ResultItem]:
    """
    Turn a ranked QueryResult into list items.

    An empty result set yields exactly one "no results" placeholder.
    """
    if not results:
        return [ResultItem(text=NO_RESULTS_TEXT, css_class=NO_RESULTS_CLASS)]

    return [
        ResultItem(
            text=hit.record.title or "",
            href=hit.record.permalink,
            css_class=RESULT_ITEM_CLASS,
        )
        for hit in results
    ]


class ResultsView:
    """
    The rendered results list, addressed by its element id.
    """

    def __init__(self, element_id: str = "searchResults") -> None:
        if not element_id:
            raise ValueError("ResultsView requires a non-empty element id.")
        self.element_id = element_id
        self._items: Tuple[ResultItem, ...] = ()

    @property
    def items(self) -> Tuple[ResultItem, ...]:
        return self._items

    def replace(self, items: Iterable[ResultItem]) -> None:
        self._items = tuple(items)

    def clear(self) -> None:
        self._items = ()

    def inner_html(self) -> str:
        return "".join(item.to_html() for item in self._items)

    def to_html(self) -> str:
        element_id = html.escape(self.element_id, quote=True)
        return f'<ul id="{element_id}">{self.inner_html()}</ul>'
