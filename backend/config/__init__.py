import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .settings import Settings, get_settings
from .constants import (
    PIPELINE_LIMITS,
    GENERATION_CONFIG,
    SOURCE_DEFAULTS,
    REDIRECTOR_HOSTS,
    ASSESSMENT_LABELS,
    ASSESSMENT_RATINGS,
    ASSESSMENT_EXPLANATIONS,
)

REQUIRED_SETTINGS = [
    "GEMINI_API_KEY",
    "APP_JWT_SECRET",
]

def check_settings_on_startup(settings: Settings):
    """Check for required secrets on startup."""
    missing_keys = [key for key in REQUIRED_SETTINGS if not getattr(settings, key, None)]

    if missing_keys:
        logger.warning(f"Missing settings: {', '.join(missing_keys)}. Corresponding calls will fail.")
    else:
        logger.info("All required settings are configured.")

__all__ = [
    "logger",
    "Settings",
    "get_settings",
    "check_settings_on_startup",
    "PIPELINE_LIMITS",
    "GENERATION_CONFIG",
    "SOURCE_DEFAULTS",
    "REDIRECTOR_HOSTS",
    "ASSESSMENT_LABELS",
    "ASSESSMENT_RATINGS",
    "ASSESSMENT_EXPLANATIONS",
]
