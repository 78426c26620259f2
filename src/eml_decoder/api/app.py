"""
FastAPI application exposing the MIME decoder over HTTP.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import structlog

from ..version import API_VERSION, DECODER_VERSION
from ..config import settings
from ..logging_config import setup_logging
from .routes import decode, health, version
from .middleware import setup_error_handling_middleware, setup_logging_middleware

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(
        "Starting EML Decoder API",
        version=API_VERSION,
        decoder_version=DECODER_VERSION,
        log_level=settings.log_level,
        max_email_size_mb=settings.max_email_size_mb,
    )
    yield
    logger.info("Shutting down EML Decoder API")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="EML Decoder",
        description="Decodes RFC5322/MIME messages into text, HTML, attachments and embedded files",
        version=API_VERSION,
        lifespan=lifespan,
    )

    # Custom middleware (order matters - last added = outermost)
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(decode.router, prefix="/api/v1/decode", tags=["Decoding"])

    return app


# Create app instance
app = create_app()


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, use uvicorn directly.
    """
    import uvicorn

    uvicorn.run(
        "eml_decoder.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
