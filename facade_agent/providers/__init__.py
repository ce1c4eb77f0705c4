"""API provider clients for external services."""

from .base import ModelClient
from .gemini import GeminiClient
from .storage import GCSArtifactStorage
from .brevo import BrevoEmailClient
from .hubspot import HubSpotClient

__all__ = [
    "ModelClient",
    "GeminiClient",
    "GCSArtifactStorage",
    "BrevoEmailClient",
    "HubSpotClient",
]
