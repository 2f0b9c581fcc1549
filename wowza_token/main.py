"""Wowza token service FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from wowza_token import __version__
from wowza_token.config import get_settings
from wowza_token.api.routes import tokens
from wowza_token.api.ratelimit import limiter

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()

    logger.info(f"Wowza token service starting on port {settings.port}")
    logger.info(f"Parameter prefix: {settings.prefix}")
    logger.info(f"Hash algorithm: {settings.hash_algorithm}")
    if not settings.shared_secret:
        logger.warning("WOWZA_TOKEN_SHARED_SECRET is not set, signing requests will fail")
    if not settings.api_key:
        logger.warning("WOWZA_TOKEN_API_KEY is not set, signing requests will be refused")

    yield

    logger.info("Wowza token service shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Wowza Token Service",
        description="SecureToken signed playback URLs for Wowza Streaming Engine",
        version=__version__,
        lifespan=lifespan,
    )

    # Set up rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(tokens.router, prefix="/api/tokens", tags=["tokens"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "wowza_token.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
