# Application factory and FastAPI setup.

import logging

from fastapi import FastAPI

from .errors import ConfigurationError, register_error_handlers
from .routers import emails, health, summarize
from .settings import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    app = FastAPI(title="Meeting Notes Summarizer", version="0.1.0")

    settings = get_settings()
    missing = settings.missing_summarization_fields() + settings.missing_delivery_fields()
    for name in missing:
        logger.warning("%s is not configured; dependent endpoint will fail", name)
    if missing and settings.strict_config:
        raise ConfigurationError(f"{', '.join(missing)} not configured")
    app.state.settings = settings

    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(summarize.router)
    app.include_router(emails.router)
    return app
