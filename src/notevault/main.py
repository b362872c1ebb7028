# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import (
    auth_router,
    health_router,
    notes_router,
    sharing_router,
    tags_router,
    workspaces_router,
)
from .config import get_settings
from .core.errors import InvalidInput, NoteVaultError, Unauthenticated, UpstreamFailure
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import Database

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting NoteVault application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    database: Optional[Database] = getattr(app.state, "database", None)
    if database is None:
        database = Database.from_settings(settings)
        app.state.database = database

    if settings.create_tables_on_startup:
        await database.create_tables()
        logger.info("Database tables created/verified")

    redis_client = get_redis_client()
    try:
        await redis_client.connect()
    except (RedisError, OSError) as e:
        logger.warning("Redis connection failed: %s. Logout blacklist disabled", e)

    yield

    logger.info("Shutting down NoteVault application")
    await redis_client.disconnect()
    await database.dispose()


def _error_response(error: NoteVaultError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


async def notevault_error_handler(request: Request, exc: NoteVaultError) -> JSONResponse:
    return _error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures use the invalid_input envelope (400)."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        detail = None
    return _error_response(InvalidInput(detail))


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Store unavailable",
        extra={"path": request.url.path, "exception_type": type(exc).__name__},
    )
    return _error_response(UpstreamFailure())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": kind, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application; tests pass their own ``Database``."""
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant notes API with sharing, tags and workspaces",
        version=__version__,
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NoteVaultError, notevault_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    for store_error in (OperationalError, InterfaceError, ConnectionError):
        app.add_exception_handler(store_error, store_error_handler)

    for router in (
        auth_router,
        notes_router,
        tags_router,
        workspaces_router,
        sharing_router,
        health_router,
    ):
        app.include_router(router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {
            "message": "NoteVault API",
            "version": __version__,
            "documentation": {"swagger_ui": "/docs", "redoc": "/redoc"},
            "api": settings.api_prefix,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notevault.main:app", host=settings.host, port=settings.port, reload=settings.reload
    )
