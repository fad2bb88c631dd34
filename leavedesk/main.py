"""LeaveDesk — FastAPI Application Factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from leavedesk.analytics.router import router as analytics_router
from leavedesk.common.exceptions import (
    StoreUnavailableException,
    register_exception_handlers,
)
from leavedesk.common.rate_limit import limiter
from leavedesk.config import settings
from leavedesk.dashboard.router import router as dashboard_router
from leavedesk.database import async_session_factory, engine
from leavedesk.directory.router import teams_router, users_router
from leavedesk.leave.router import router as leave_router
from leavedesk.store.base import LeaveStore
from leavedesk.store.memory import InMemoryLeaveStore
from leavedesk.store.sql import SqlLeaveStore

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_store() -> LeaveStore:
    """Store named by ``STORE_BACKEND``: ``memory`` (demo data) or ``sql``."""
    if settings.STORE_BACKEND == "memory":
        return InMemoryLeaveStore.with_demo_data()
    return SqlLeaveStore(async_session_factory)


async def resolve_startup_store(store: LeaveStore) -> LeaveStore:
    """Swap to demo data when the configured store is unreachable or empty."""
    if not settings.DEMO_FALLBACK or isinstance(store, InMemoryLeaveStore):
        return store
    try:
        users = await store.list_users()
    except StoreUnavailableException as exc:
        logger.warning("Store unavailable at startup (%s); serving demo data", exc.detail)
        return InMemoryLeaveStore.with_demo_data()
    if not users:
        logger.warning("Store has no users; serving demo data")
        return InMemoryLeaveStore.with_demo_data()
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    # Startup
    app.state.store = await resolve_startup_store(app.state.store)
    logger.info("Serving leave data from %s", type(app.state.store).__name__)
    yield
    # Shutdown
    await engine.dispose()


def create_app(store: Optional[LeaveStore] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="LeaveDesk",
        description="Leave requests, approvals, team calendar and absence analytics",
        version="1.0.0",
        docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else build_store()

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check (no acting user)
    @app.get("/api/v1/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT,
            "store": type(app.state.store).__name__,
        }

    # Register routers
    app.include_router(users_router, prefix="/api/v1/users", tags=["users"])
    app.include_router(teams_router, prefix="/api/v1/teams", tags=["teams"])
    app.include_router(leave_router, prefix="/api/v1/leave", tags=["leave"])
    app.include_router(analytics_router, prefix="/api/v1/analytics", tags=["analytics"])
    app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])

    return app


app = create_app()
