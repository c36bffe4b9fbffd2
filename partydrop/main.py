"""Application factory and entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from partydrop.config import Settings, get_settings
from partydrop.core.exceptions import InvalidInput, InvalidSession, PartyDropError
from partydrop.core.session import clear_session_cookie
from partydrop.database import create_db_engine, create_session_factory
from partydrop.routers import auth, events

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Short message naming the first offending field."""
    errors = exc.errors()
    if not errors:
        return InvalidInput.default_message

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", InvalidInput.default_message)
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"message": ...}``."""

    @app.exception_handler(PartyDropError)
    async def partydrop_error_handler(request: Request, exc: PartyDropError) -> JSONResponse:
        response = JSONResponse(status_code=exc.status_code, content={"message": exc.message})
        if isinstance(exc, InvalidSession) and exc.clear_cookie:
            clear_session_cookie(response, request.app.state.settings)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=InvalidInput.status_code,
            content={"message": _describe_validation_error(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own engine and session factory.

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"{settings.app_name} starting in {settings.app_env} mode")
        yield
        engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(events.router)

    @app.get("/api/health")
    def health_check() -> dict[str, bool]:
        return {"ok": True}

    return app


def run() -> None:
    """Configure logging and serve the application with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "partydrop.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        loop="asyncio",  # Explicitly use asyncio instead of auto (which tries uvloop)
    )


if __name__ == "__main__":
    run()
