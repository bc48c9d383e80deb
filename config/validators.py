"""
Configuration Validation for the Blog Syndicator

This module contains configuration validation logic.
Extracted from settings.py for better separation of concerns.
"""

from typing import Sequence

from data.models import SiteConfig
from utils.exceptions import ConfigurationError


def validate_settings(sites: Sequence[SiteConfig]) -> bool:
    """
    Validate that all required settings are properly configured.

    Args:
        sites: The site configurations loaded for this run.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    errors = []

    # Required environment variables
    required_vars = [
        ("OPENAI_API_KEY", settings.OPENAI_API_KEY),
        ("WEBFLOW_API_KEY", settings.WEBFLOW_API_KEY),
        ("WEBFLOW_COLLECTION_ID", settings.WEBFLOW_COLLECTION_ID),
        ("WEBFLOW_ORIGINAL_LINK_FIELD", settings.WEBFLOW_ORIGINAL_LINK_FIELD),
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")

    if not sites:
        errors.append("No blog site is defined. Add at least one site to the sites file.")

    if settings.REQUEST_DELAY_MIN_MS < 0:
        errors.append(f"REQUEST_DELAY_MIN_MS must not be negative, got {settings.REQUEST_DELAY_MIN_MS}")

    if settings.REQUEST_DELAY_MAX_MS < settings.REQUEST_DELAY_MIN_MS:
        errors.append(
            f"REQUEST_DELAY_MAX_MS ({settings.REQUEST_DELAY_MAX_MS}) must be >= "
            f"REQUEST_DELAY_MIN_MS ({settings.REQUEST_DELAY_MIN_MS})"
        )

    if settings.REQUEST_TIMEOUT <= 0:
        errors.append(f"REQUEST_TIMEOUT must be positive, got {settings.REQUEST_TIMEOUT}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary(sites: Sequence[SiteConfig] = ()) -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    return {
        "sites": [site.id for site in sites],
        "webflow": {
            "api_base_url": settings.WEBFLOW_API_BASE_URL,
            "collection_id": settings.WEBFLOW_COLLECTION_ID,
            "original_link_field": settings.WEBFLOW_ORIGINAL_LINK_FIELD,
            "configured": bool(settings.WEBFLOW_API_KEY),
        },
        "openai": {
            "text_model": settings.OPENAI_GPT_MODEL,
            "image_model": settings.OPENAI_IMAGE_MODEL,
            "image_size": settings.OPENAI_IMAGE_SIZE,
            "configured": bool(settings.OPENAI_API_KEY),
        },
        "pacing_ms": [settings.REQUEST_DELAY_MIN_MS, settings.REQUEST_DELAY_MAX_MS],
        "run_log_dir": str(settings.RUN_LOG_DIR),
    }
