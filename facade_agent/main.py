"""Main FastAPI application entry point."""

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import generate, health
from .providers import GeminiClient, GCSArtifactStorage, BrevoEmailClient, HubSpotClient
from .core import GenerationOrchestrator, DeliveryService
from .utils.config import load_config, allowed_origins
from .utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown.

    Initializes all clients and components on startup,
    closes them on shutdown.
    """
    logger.info("Application starting up...")

    config = load_config()

    if config.is_production and not config.frontend_url:
        logger.error(
            "FRONTEND_URL is not set in production. CORS will block all requests."
        )
    logger.info("Allowed CORS origins", extra={"origins": config.allowed_origins})

    gemini = GeminiClient(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        base_url=config.gemini_base_url,
        timeout=config.timeout_gemini_seconds,
    )
    brevo = BrevoEmailClient(
        api_key=config.brevo_api_key,
        sender_email=config.sender_email,
        sender_name=config.sender_name,
        production=config.is_production,
        timeout=config.timeout_brevo_seconds,
    )
    hubspot = HubSpotClient(
        portal_id=config.hubspot_portal_id,
        form_guid=config.hubspot_form_guid,
        page_uri=config.hubspot_page_uri,
    )
    storage = GCSArtifactStorage(
        bucket_name=config.gcs_bucket_name,
        url_ttl_seconds=config.signed_url_ttl_seconds,
    )

    await gemini.initialize()
    await brevo.initialize()
    await hubspot.initialize()
    storage.initialize()
    logger.info("Provider clients initialized")

    app.state.config = config
    app.state.orchestrator = GenerationOrchestrator(model_client=gemini)
    app.state.delivery = DeliveryService(
        storage=storage,
        email_client=brevo,
        crm_client=hubspot,
    )

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Application shutting down...")

        await gemini.close()
        await brevo.close()
        await hubspot.close()

        logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Facade Agent",
    description="Balcony glazing and facade modernization proposals from photos",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(os.getenv("FRONTEND_URL")),
    allow_methods=["POST"],
    allow_headers=["Content-Type"],
)

# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(generate.router, tags=["generation"])


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 3001))

    uvicorn.run(
        "facade_agent.main:app",
        host="0.0.0.0",
        port=port,
        log_level="info",
    )
