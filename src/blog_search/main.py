"""
Blog Search Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures global exception handling, and provides a test-friendly application
factory.

Design Goals
------------
- Index loading starts at startup but never blocks it
- Centralized router registration
- Global exception safety net
- Test-friendly via create_app()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI

from .api import health_routes, search_routes
from .api.dependencies import build_search_controller
from .config import settings
from .core.errors import unhandled_exception_handler
from .search.controller import SearchController, SearchState


logger = logging.getLogger("search.app")


# ---------------------------------------------------------------------
# Index Initialization
# ---------------------------------------------------------------------

async def _initialize_search(controller: SearchController) -> None:
    """
    Background task: fetch the index and report the outcome.
    """
    try:
        result = await controller.initialize()
    except Exception:
        logger.exception("Search initialization crashed")
        return

    if result.ok:
        logger.info("Search ready (%d records)", result.record_count)
    elif settings.show_unavailable_notice:
        logger.warning("Search unavailable; users will see a notice")
    else:
        logger.warning("Search unavailable; degrading silently")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app(controller: Optional[SearchController] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    controller : Optional[SearchController]
        Pre-built controller, mainly for tests. When omitted one is built
        from settings at startup.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting blog-search")

        search_controller = controller or build_search_controller()
        app.state.search_controller = search_controller

        init_task = None
        if search_controller.state is SearchState.UNINITIALIZED:
            # Not awaited: input arriving while LOADING is simply ignored
            init_task = asyncio.create_task(_initialize_search(search_controller))

        yield

        if init_task is not None and not init_task.done():
            init_task.cancel()
        logger.info("Shutting down blog-search")

    app = FastAPI(
        title="blog-search",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # --------------------------------------------------------------
    # Global Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(search_routes.router)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
