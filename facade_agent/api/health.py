"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()

SERVICE_NAME = "facade-agent"
SERVICE_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": _now(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Ready once the lifespan has wired the orchestrator and delivery."""
    state = request.app.state
    ready = hasattr(state, "orchestrator") and hasattr(state, "delivery")
    return {
        "ready": ready,
        "timestamp": _now(),
    }
