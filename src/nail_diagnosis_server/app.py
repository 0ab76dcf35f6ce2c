"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads rulesets and initialises the pipeline once
  - CORS middleware
  - Global exception handlers (KeyError → 404, anything else → 500)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``nail-diagnosis-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nail_diagnosis.catalog import CatalogReader, HttpCatalogReader
from nail_diagnosis.pipeline import DiagnosisPipeline
from nail_diagnosis.ruleset import RulesetStore

from nail_diagnosis_server.config import ServerSettings, load_settings
from nail_diagnosis_server.errors import (
    generic_error_handler,
    key_error_handler,
)
from nail_diagnosis_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup.

    Startup:
      1. Load YAML rulesets into a ``RulesetStore``
      2. Build the catalog reader (unless one was injected) and the pipeline
      3. Stash them on ``app.state`` for dependency injection
    """
    settings: ServerSettings = app.state.settings

    # --- Load rulesets ---
    store = RulesetStore(ruleset_dir=settings.ruleset_dir)
    store.load()
    logger.info("RulesetStore loaded successfully")

    # --- Build pipeline ---
    catalog: CatalogReader | None = app.state.catalog
    if catalog is None:
        catalog = HttpCatalogReader(
            base_url=settings.catalog_base_url,
            path=settings.catalog_products_path,
            timeout=settings.catalog_timeout_seconds,
        )
        logger.info(
            "Catalog: %s%s", settings.catalog_base_url, settings.catalog_products_path,
        )

    app.state.store = store
    app.state.pipeline = DiagnosisPipeline(store, catalog)

    yield


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    catalog: CatalogReader | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application.

    Args:
        settings: server settings; read from the environment if omitted
        catalog: optional catalog reader override (otherwise an
            ``HttpCatalogReader`` is built from the settings)
    """
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Nail Diagnosis API Server",
        description="REST API for the nail diagnosis and product recommendation engine",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings
    app.state.catalog = catalog

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — reports whether the rulesets are loaded."""
        store: RulesetStore | None = getattr(app.state, "store", None)
        if store is None or not store.questions:
            return {"status": "error", "detail": "rulesets not loaded"}
        return {"status": "ok", "questions": len(store.questions)}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn nail_diagnosis_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``nail-diagnosis-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "nail_diagnosis_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
