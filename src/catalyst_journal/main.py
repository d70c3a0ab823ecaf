"""FastAPI application for Catalyst Journal."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_database
from .api.exception_handlers import register_exception_handlers
from .api.middleware.rate_limit import limiter
from .api.routes import auth, export, processes, progress, responses, training
from .config import get_settings
from .curriculum.catalog import get_catalog
from .utils.log_sanitizer import install_log_sanitizer

# Install log sanitization filter before any logging occurs
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Catalyst Journal v{__version__}")

    if settings.uses_default_secret:
        logger.warning(
            "CATALYST_JWT_SECRET_KEY is not set; tokens are signed with the built-in "
            "development secret. Set it before deploying."
        )

    # Refuse to start on a catalog with dangling references
    get_catalog().validate()

    db = app.dependency_overrides.get(get_database, get_database)()
    logger.info(f"Workbook DB: {db.db_path}")
    yield
    # Shutdown
    logger.info("Shutting down Catalyst Journal")


app = FastAPI(
    title="Catalyst Journal API",
    description="Multi-day problem-solving workbook",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

# Rate limiting
app.state.limiter = limiter

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
for module in (auth, training, progress, responses, processes, export):
    app.include_router(module.router, prefix=settings.api_prefix)


def _status() -> dict:
    return {
        "name": "Catalyst Journal API",
        "version": __version__,
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return _status()


@app.get("/health")
async def health():
    """Health check endpoint."""
    return _status()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
