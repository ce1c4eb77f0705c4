"""Configuration management for the facade agent."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml
from pydantic import BaseModel, Field, ValidationError
from dotenv import load_dotenv

from .errors import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_SETTINGS_PATH = Path("config/settings.yaml")

DEV_ORIGINS = ["http://localhost:3000", "http://localhost:8000"]


def allowed_origins(frontend_url: Optional[str]) -> List[str]:
    """CORS origins: the deployed frontend plus local development hosts."""
    origins = [frontend_url] if frontend_url else []
    return origins + [o for o in DEV_ORIGINS if o not in origins]


class Config(BaseModel):
    """Main application configuration."""

    # Image model
    gemini_api_key: str = Field(..., alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash-image", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    timeout_gemini_seconds: float = Field(default=120.0, alias="TIMEOUT_GEMINI_SECONDS")

    # Storage
    gcs_bucket_name: str = Field(..., alias="GCS_BUCKET_NAME")
    signed_url_ttl_seconds: int = Field(default=3600, alias="SIGNED_URL_TTL_SECONDS")

    # Email
    brevo_api_key: Optional[str] = Field(default=None, alias="BREVO_API_KEY")
    sender_email: str = Field(default="no-reply@ai-generator.com", alias="SENDER_EMAIL")
    sender_name: str = Field(default="AI Balcony Generator", alias="SENDER_NAME")
    timeout_brevo_seconds: float = Field(default=30.0, alias="TIMEOUT_BREVO_SECONDS")

    # CRM
    hubspot_portal_id: Optional[str] = Field(default=None, alias="HUBSPOT_PORTAL_ID")
    hubspot_form_guid: Optional[str] = Field(default=None, alias="HUBSPOT_FORM_GUID")
    hubspot_page_uri: str = Field(
        default="https://ai-glazing-generator.com", alias="HUBSPOT_PAGE_URI"
    )

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    frontend_url: Optional[str] = Field(default=None, alias="FRONTEND_URL")
    port: int = Field(default=3001, alias="PORT")

    class Config:
        populate_by_name = True

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return allowed_origins(self.frontend_url)


# Global config instance
_config: Optional[Config] = None


def _read_settings_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.info(f"No settings file at {path}, using environment only")
        return {}

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    return data


def load_config(settings_path: Optional[Path] = None) -> Config:
    """
    Load configuration from environment and the optional YAML settings file.

    Environment variables win over values from the file.

    Args:
        settings_path: YAML file to merge (defaults to config/settings.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    try:
        file_settings = _read_settings_file(settings_path or DEFAULT_SETTINGS_PATH)

        config_data = {
            **file_settings,  # YAML config
            **os.environ,  # Environment variables
        }

        _config = Config(**config_data)

    except (ValidationError, yaml.YAMLError, OSError) as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")

    logger.info(
        "Configuration loaded successfully",
        extra={
            "environment": _config.app_env,
            "model": _config.gemini_model,
            "email_enabled": _config.brevo_api_key is not None,
        }
    )

    return _config


def get_config() -> Config:
    """
    Get the current configuration instance.

    Raises:
        ConfigurationError: If config not loaded
    """
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config
