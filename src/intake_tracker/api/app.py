"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from intake_tracker.api.foods import router as foods_router
from intake_tracker.api.intake import router as intake_router
from intake_tracker.api.meals import router as meals_router
from intake_tracker.api.plans import router as plans_router
from intake_tracker.app_logging import configure_logging
from intake_tracker.containers import AppContainer
from intake_tracker.domain.errors import (
    ConcurrentUpdateConflict,
    EntityNotFoundError,
    MissingProfileDataError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(meals_router)
    app.include_router(intake_router)
    app.include_router(plans_router)
    app.include_router(foods_router)

    @app.exception_handler(EntityNotFoundError)
    async def not_found(_request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(MissingProfileDataError)
    async def missing_profile_data(
        _request: Request, exc: MissingProfileDataError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "missing_fields": exc.missing_fields},
        )

    @app.exception_handler(ConcurrentUpdateConflict)
    async def conflict(
        _request: Request, exc: ConcurrentUpdateConflict
    ) -> JSONResponse:
        logger.warning("Rejected stale write: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
