"""Nautic — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nautic.adapters.persistence.database import async_session_factory, engine
from nautic.adapters.persistence.repositories import (
    SqlServiceRequestRepository,
    SqlUnreadRepository,
)
from nautic.application.use_cases.unread_counts import (
    UnreadCounts,
    UnreadCountService,
    compute_counts,
)
from nautic.config import settings
from nautic.infrastructure.api.routes_health import router as health_router
from nautic.infrastructure.api.routes_requests import router as requests_router
from nautic.infrastructure.api.routes_session import router as session_router
from nautic.infrastructure.api.routes_users import router as users_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def load_unread_counts(user_id: int) -> UnreadCounts:
    """Counts for one user, read in a session of their own."""
    async with async_session_factory() as session:
        return await compute_counts(
            user_id,
            SqlUnreadRepository(session),
            SqlServiceRequestRepository(session),
            settings.open_statuses,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)

    await app.state.unread_counts.start()
    yield
    await app.state.unread_counts.stop()
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Nautic — boat manager assignment",
        description="Service request submission and boat manager assignment",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.unread_counts = UnreadCountService(
        load_unread_counts,
        poll_interval=settings.unread_poll_interval_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(requests_router, prefix="/api")
    app.include_router(session_router, prefix="/api")
    app.include_router(users_router, prefix="/api")

    return app


app = create_app()
