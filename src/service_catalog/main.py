"""Service Catalog FastAPI application."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.catalog_graph.metadata_source import MetadataSource
from src.service_catalog.services.catalog_store import CatalogStore
from src.shared.config import CatalogConfig
from src.shared.constants import SERVICE_CATALOG_PORT, SERVICE_CATALOG_SERVICE_NAME, VERSION
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging


def create_app(config: CatalogConfig | None = None) -> FastAPI:
    """Build the application; state is created fresh in the lifespan."""
    config = config or CatalogConfig()
    logger = setup_logging(SERVICE_CATALOG_SERVICE_NAME, config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - initialize and cleanup resources."""
        app.state.start_time = time.time()
        app.state.config = config
        app.state.store = CatalogStore()
        app.state.metadata_source = MetadataSource.from_config(config)
        await app.state.metadata_source.refresh()

        logger.info(
            "Service started: name=%s version=%s port=%d metadata=%s",
            SERVICE_CATALOG_SERVICE_NAME, VERSION, SERVICE_CATALOG_PORT,
            app.state.metadata_source.data_source.value,
        )
        yield

        app.state.store.reset()
        logger.info("Service stopped: name=%s", SERVICE_CATALOG_SERVICE_NAME)

    app = FastAPI(
        title="Service Catalog",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(TraceIDMiddleware)
    register_exception_handlers(app)

    from src.service_catalog.routers.graph import router as graph_router
    from src.service_catalog.routers.health import router as health_router
    from src.service_catalog.routers.metadata import router as metadata_router
    from src.service_catalog.routers.reference import router as reference_router
    from src.service_catalog.routers.services import router as services_router

    app.include_router(health_router)
    app.include_router(services_router)
    app.include_router(graph_router)
    app.include_router(reference_router)
    app.include_router(metadata_router)
    return app


app = create_app()
