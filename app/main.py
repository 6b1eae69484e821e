"""Field Operations Dashboard — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.adapters.persistence.database import engine
from app.domain.exceptions import DomainError
from app.infrastructure.api.dependencies import map_session, route_tracker
from app.infrastructure.api.errors import domain_error_handler
from app.infrastructure.api.routes_catalog import router as catalog_router
from app.infrastructure.api.routes_crews import router as crews_router
from app.infrastructure.api.routes_health import router as health_router
from app.infrastructure.api.routes_map import router as map_router
from app.infrastructure.api.routes_sites import router as sites_router
from app.infrastructure.api.routes_tickets import router as tickets_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    # Background timers must not outlive the app
    await route_tracker.stop()
    await map_session.close()
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Field Operations Dashboard",
        description="Sites, crews and tickets on a map, with nearest-crew routing",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the map frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(sites_router, prefix="/api")
    app.include_router(crews_router, prefix="/api")
    app.include_router(tickets_router, prefix="/api")
    app.include_router(catalog_router, prefix="/api")
    app.include_router(map_router, prefix="/api")

    return app


app = create_app()
