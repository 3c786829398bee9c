"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the TripCraft backend application.
"""

from logging import INFO, Formatter, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MIN_TRIP_DURATION = 1
MAX_TRIP_DURATION = 30
MAX_TRAVELERS = 50
MAX_INTERESTS_COUNT = 20
MAX_NOTES_LENGTH = 1000
MAX_COMMENT_LENGTH = 2000

# Placeholders inserted by the day list editor
DEFAULT_ACTIVITY = "New activity"
DEFAULT_TIP = "New travel tip"

# Store tables
ITINERARIES_TABLE = "itineraries"
SHARES_TABLE = "shared_itineraries"
COMMENTS_TABLE = "itinerary_comments"
PERSONAS_TABLE = "user_personas"

# Response constants
DEFAULT_ERROR_MESSAGE = "An unexpected server error occurred."
ITINERARY_GENERATION_ERROR = "Failed to generate itinerary."
ITINERARY_REFINEMENT_ERROR = "Failed to refine itinerary."
SAVE_ERROR_MESSAGE = "Failed to save changes"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "TripCraft Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    PRODUCTION_FRONTEND_URL: str | None = None

    # AI Configuration
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.0-flash"
    AI_REQUEST_TIMEOUT: int = 60  # seconds
    AI_MAX_RETRIES: int = 2
    AI_RETRY_DELAY: float = 1.0  # seconds
    AI_TEMPERATURE: float = 0.7
    AI_MAX_OUTPUT_TOKENS: int = 3000

    # Document store (Supabase PostgREST). Memory store is used when unset.
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORE_REQUEST_TIMEOUT: float = 10.0  # seconds
    STORE_MAX_RETRIES: int = 3

    # Editing
    AUTOSAVE_DEBOUNCE_SECONDS: float = 2.0

    # Rate limiting
    GENERATE_RATE_LIMIT: str = "10/hour"
    REFINE_RATE_LIMIT: str = "30/hour"


settings = Settings()


class LimiterConfig(BaseSettings):
    """Rate limiter configuration."""

    model_config = SettingsConfigDict(env_prefix="LIMITER_", case_sensitive=False)

    default_limits: list[str] = ["100/hour"]
    headers_enabled: bool = False
    storage_uri: str = "memory://"
    enabled: bool = True


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating file handler to a module logger when enabled.

    Args:
        logger: Module logger, usually ``getLogger(__name__)``.

    Returns:
        The same logger, for chaining at module import time.
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = Path(settings.LOG_FILE)
    if any(getattr(h, "baseFilename", None) == str(log_file.resolve()) for h in logger.handlers):
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger
