"""FastAPI application for the Training Journal."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .api.exception_handlers import register_exception_handlers
from .api.routes import journal, risk
from .config import get_settings
from .utils.log_sanitizer import install_log_sanitizer

# Redact notes and PII before any logging occurs
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    # Handlers added by the server after import need the filter too
    install_log_sanitizer()
    logger.info(f"Starting Training Journal API v{__version__}")
    logger.info(f"Journal DB: {settings.db_path}")
    yield
    logger.info("Shutting down Training Journal API")


app = FastAPI(
    title="Training Journal API",
    description="Daily training journal with readiness-risk scoring",
    version=__version__,
    debug=get_settings().debug,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(journal.router, prefix="/api/v1/users", tags=["journal"])
app.include_router(risk.router, prefix="/api/v1/users", tags=["risk"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
