"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import InterfaceError, OperationalError

from blog_cms.config import get_settings
from blog_cms.domain.exceptions import (
    ConcurrentModificationError,
    DomainError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStateTransitionError,
    ServiceUnavailableError,
)
from blog_cms.infrastructure.database import Base, engine
from blog_cms.infrastructure.logging.log_config import setup_logging
from blog_cms.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

# Most specific first; the first matching class decides the status code
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (ConcurrentModificationError, status.HTTP_409_CONFLICT),
    (InvalidStateTransitionError, status.HTTP_409_CONFLICT),
    (DomainValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate domain exceptions into HTTP responses."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    if status_code == status.HTTP_404_NOT_FOUND:
        logger.debug("%s %s: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return _error_response(status_code, exc)


async def database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    """Persistence outages surface as ServiceUnavailableError (503); the request is not retried."""
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc)
    return await domain_error_handler(request, ServiceUnavailableError("Database unavailable"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and create tables."""
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(InterfaceError, database_unavailable_handler)

    # Mount API routes
    app.include_router(api_router)

    # Uploaded images are served from here
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blog_cms.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
