from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from app.api.v1 import tours
from app.core.config import Settings, get_settings
from app.core.logging import setup_logging
from app.tours.service import TourSearchService
from app.tours.sources import TourOperatorClient, build_tour_operator_client

logger = logging.getLogger(__name__)

LANDING_PAGE = """
<h1>Tour Package Search API</h1>
<p>API is running. Use POST {prefix}/tours/search to search for tours.</p>
"""
FRONTEND_LINK = '<p><a href="/index.html">Go to Frontend</a></p>\n'


def create_app(
    settings: Settings | None = None,
    source: TourOperatorClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    source = source or build_tour_operator_client(settings)
    search_service = TourSearchService(source, default_limit=settings.default_results_limit)
    api_prefix = settings.api_prefix.rstrip("/")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Tour search API ready: POST %s/tours/search", api_prefix)
        try:
            yield
        finally:
            await source.close()

    app = FastAPI(title="Tour Package Search API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins(),
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.dependency_overrides[tours.get_search_service] = lambda: search_service
    app.dependency_overrides[get_settings] = lambda: settings
    app.include_router(tours.router, prefix=api_prefix)

    static_dir = Path(settings.static_dir)
    serve_frontend = (static_dir / "index.html").is_file()
    landing_page = LANDING_PAGE.format(prefix=api_prefix)
    if serve_frontend:
        landing_page += FRONTEND_LINK

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def root() -> str:
        return landing_page

    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found, frontend is not served", static_dir)

    return app


def build_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    return create_app(settings)


__all__ = ["create_app", "build_app"]
