"""
Errors and Global Error Handling

This module defines the search subsystem's exception hierarchy and the
application-wide exception handlers registered on the FastAPI app.

Design Goals
------------
- Index failures are typed so callers can tell network from payload errors
- Never leak internal exception details to clients
- Log full stack traces internally for debugging
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("search.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class SearchError(RuntimeError):
    """Base error for the search subsystem."""


class SearchIndexError(SearchError):
    """Base error for loading the search index."""


class IndexFetchError(SearchIndexError):
    """Raised when the index cannot be fetched (network or HTTP status)."""


class MalformedIndexError(SearchIndexError):
    """Raised when the index body is not a JSON array of page records."""


class SearchUnavailableError(SearchError):
    """Raised when a query is issued before the matcher is ready."""


class SearchStateError(SearchError):
    """Raised on an illegal controller state transition."""


class SiteConfigError(SearchError):
    """Raised when the site configuration file is missing or unusable."""


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns a generic 500 error to the client with no internal details.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
        A JSON 500 response with a minimal error payload.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
