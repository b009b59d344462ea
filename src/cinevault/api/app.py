"""FastAPI application factory.

API layer:
- Parses multipart forms, reads/writes DB through the repository
- Delegates upload-then-persist sequences to the catalog
- Translates domain errors into `{"message", "error"}` JSON bodies

The session factory and image gateway are built (or received) here and
stored on `app.state`; handlers reach them through dependencies.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.orm import sessionmaker

from cinevault.config import Settings
from cinevault.db.repo import DbSession
from cinevault.db.session import create_db_engine, create_session_factory, init_db
from cinevault.models.types import MessageResponse
from cinevault.storage.base import ImageGatewayBase

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error to be rendered as a JSON message body."""

    def __init__(self, status_code: int, message: str, error: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_image_gateway(request: Request) -> ImageGatewayBase:
    """Dependency to get the configured image gateway."""
    return request.app.state.image_gateway


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    body = MessageResponse(message=exc.message, error=exc.error)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


FILE_FIELDS = {"image"}

# Messages for requests rejected before reaching a handler, keyed by method.
VALIDATION_MESSAGES = {
    "POST": "Invalid movie data",
    "PUT": "Error updating movie",
}


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request parsing failures (e.g. a text value sent as the image) as 400."""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors
    )

    message = VALIDATION_MESSAGES.get(request.method, "Invalid request")
    if request.method == "POST" and any(err["loc"] and err["loc"][-1] in FILE_FIELDS for err in errors):
        message = "No file uploaded"

    logger.warning(f"Rejected {request.method} {request.url.path}: {detail}")
    return await _handle_api_error(request, ApiError(400, message, detail))


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
    image_gateway: ImageGatewayBase | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Runtime settings. Read from the environment if omitted.
        session_factory: Session factory to use. When omitted, an engine is
            built from settings.database_url and its tables are created on
            startup.
        image_gateway: Image gateway to use. When omitted, a Cloudinary
            gateway is built from settings.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings.from_env()

    engine: Engine | None = None
    if session_factory is None:
        engine = create_db_engine(settings.database_url)
        session_factory = create_session_factory(engine)

    if image_gateway is None:
        from cinevault.storage.cloudinary_gateway import CloudinaryImageGateway

        image_gateway = CloudinaryImageGateway.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            init_db(engine)
            logger.info("Database schema ready")
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="Cinevault API",
        description="Movie catalog with hosted images",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory
    app.state.image_gateway = image_gateway

    allow_all = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)

    # Include routes
    from cinevault.api.routes import movies

    app.include_router(movies.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
