"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from event_gallery.api.gallery import router as gallery_router
from event_gallery.api.operator import router as operator_router
from event_gallery.app_logging import configure_logging
from event_gallery.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        # Searches report "still loading" until this finishes.
        load_task = asyncio.create_task(state_container.extraction_service.load())
        yield
        if not load_task.done():
            logger.info("Stopping face model load before shutdown")
            load_task.cancel()
        try:
            await state_container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(gallery_router)
    app.include_router(operator_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, str]:
        """Health check including face search readiness."""
        state_container: AppContainer = request.app.state.container
        return {
            "status": "ok",
            "face_search": state_container.extraction_service.status.value,
        }

    return app
