"""
Search Index Client

Fetches and parses the `index.json` artifact Hugo generates when JSON
output is enabled for the home page.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import settings
from ..core.errors import IndexFetchError, MalformedIndexError
from ..search.models import SearchRecord

logger = logging.getLogger("search.index")

_records_adapter = TypeAdapter(List[SearchRecord])

SearchIndex = Tuple[SearchRecord, ...]


def parse_index(payload: Any) -> SearchIndex:
    """
    Validate a decoded JSON payload as a search index.

    Duplicate permalinks keep the first record; later ones are dropped.

    Raises
    ------
    MalformedIndexError
        If the payload is not an array of objects with a `permalink`.
    """
    if not isinstance(payload, list):
        raise MalformedIndexError(
            f"Search index must be a JSON array, got {type(payload).__name__}."
        )

    try:
        records = _records_adapter.validate_python(payload)
    except ValidationError as exc:
        raise MalformedIndexError(
            f"Search index has {exc.error_count()} invalid record field(s)."
        ) from exc

    seen: Dict[str, SearchRecord] = {}
    for record in records:
        if record.permalink in seen:
            logger.warning("Duplicate permalink in search index: %s", record.permalink)
            continue
        seen[record.permalink] = record

    return tuple(seen.values())


def load_index_file(path: str | Path) -> SearchIndex:
    """
    Read a search index from a local file, e.g. Hugo's `public/index.json`.
    """
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as exc:
        raise IndexFetchError(f"Failed to read search index: {exc}") from exc
    except ValueError as exc:
        raise MalformedIndexError("Search index is not valid JSON.") from exc

    return parse_index(payload)


class SearchIndexClient:
    def __init__(
        self,
        index_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.index_url = index_url or settings.index_url
        self.timeout = timeout if timeout is not None else settings.index_fetch_timeout
        self._transport = transport

    async def fetch(self) -> SearchIndex:
        """
        Download and parse the search index.

        Raises
        ------
        IndexFetchError
            On connection errors, timeouts and non-2xx responses.
        MalformedIndexError
            If the body is not JSON or not the expected shape.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = await client.get(self.index_url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise IndexFetchError(
                f"Failed to fetch search index from {self.index_url}: "
                f"{type(exc).__name__}"
            ) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedIndexError("Search index is not valid JSON.") from exc

        return parse_index(payload)
