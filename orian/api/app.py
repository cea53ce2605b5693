"""FastAPI application factory and configuration.

Main relay entry point with lifespan management, middleware, error payload
handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orian.api.chat import router as chat_router
from orian.relay.errors import UpstreamError

logger = logging.getLogger(__name__)

SERVICE_NAME = "orian-relay"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting King Orian relay...")
    yield
    logger.info("Shutting down King Orian relay...")


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Answer completion failures with the relay's error payload."""
    logger.error(f"Function Error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"AI function failed. {exc}"},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed bodies with an error payload instead of FastAPI's detail list."""
    logger.warning(f"Rejected malformed chat request: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request body"},
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="King Orian Relay",
        description=(
            "Stateless relay that forwards chat messages to a hosted completion "
            "API behind the King Orian persona prompt."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(UpstreamError, upstream_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(StarletteHTTPException, http_error_handler)

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": SERVICE_NAME}

    return application


app = create_app()
