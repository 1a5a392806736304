import asyncio
import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .config import ALLOWED_ORIGINS, REQUEST_TIMEOUT_SECONDS, SECURITY_HEADERS_ENABLED
from .database import Database
from .domain.accounts.router import auth_router, users_router
from .domain.feedback.router import router as feedback_router
from .domain.focus.router import router as focus_router
from .domain.invites.router import router as invites_router
from .domain.tasks.router import router as tasks_router
from .domain.teams.router import router as teams_router
from .errors import error_response, register_exception_handlers
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    database: Database = app.state.database
    try:
        database.create_all()
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    from .rate_limiter import get_redis_client

    if get_redis_client() is None:
        logger.warning("Redis unavailable - rate limits are enforced per process")

    yield
    logger.info("Application shutting down...")
    database.dispose()


def create_app(
    database: Optional[Database] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Build the API.

    The Database (engine + pool) is created here once and shared by every
    request through app.state; tests pass their own. `clock` replaces the
    wall clock used for timer bookkeeping.
    """
    app = FastAPI(title="RemoteZen API", version="1.0.0", lifespan=lifespan)
    app.state.database = database or Database()
    app.state.clock = clock

    register_exception_handlers(app)

    @app.middleware("http")
    async def request_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=REQUEST_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.error(f"⏱️ {request.method} {request.url.path} timed out after {REQUEST_TIMEOUT_SECONDS}s")
            return error_response(503, "Request timed out", "REQUEST_TIMEOUT")

    if SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
        logger.info("Security headers enabled")
    else:
        logger.warning("Security headers DISABLED - only use in development!")

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(teams_router)
    app.include_router(tasks_router)
    app.include_router(focus_router)
    app.include_router(invites_router)
    app.include_router(feedback_router)

    @app.get("/")
    def root():
        return {"message": "RemoteZen API is running"}

    @app.get("/health")
    def health(request: Request):
        try:
            request.app.state.database.ping()
        except SQLAlchemyError as e:
            logger.error(f"❌ Health check database ping failed: {e}")
            return error_response(503, "Database unavailable", "UNHEALTHY")
        return {"status": "healthy", "database": "ok"}

    return app


app = create_app()
