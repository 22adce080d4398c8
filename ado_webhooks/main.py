"""
FastAPI application entry point.
"""

from fastapi import FastAPI

from ado_webhooks import __version__
from ado_webhooks.api import webhooks
from ado_webhooks.config import get_settings
from ado_webhooks.services.registry import supported_event_types
from ado_webhooks.utils.logging import setup_logging, get_logger

settings = get_settings()

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

app = FastAPI(
    title="Azure DevOps Webhook Receiver",
    description="Authenticates and decodes Azure DevOps service hook notifications",
    version=__version__,
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Azure DevOps Webhook Receiver",
        "version": __version__,
        "event_types": supported_event_types(),
        "docs": "/docs",
    }


app.include_router(webhooks.router)

if settings.require_webhook_auth and not settings.webhook_password.get_secret_value():
    logger.warning("Webhook authentication is required but WEBHOOK_PASSWORD is empty")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
