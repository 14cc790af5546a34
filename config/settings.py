"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Reference lists (stores, volunteers) are injected here so the
ingestion pipeline never hardcodes them.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


DEFAULT_STORE_OPTIONS = sorted([
    "Amazon", "Applebee's", "Best Buy", "Burger King", "Chick-fil-A", "Chipotle",
    "Costco", "CVS Pharmacy", "Dollar General", "Domino's", "Dunkin'", "Gap",
    "Home Depot", "IHOP", "KFC", "Kohl's", "Kroger", "Macy's", "McDonald's",
    "Old Navy", "Olive Garden", "Panera Bread", "Pizza Hut", "Safeway", "Starbucks",
    "Subway", "Taco Bell", "Target", "Trader Joe's", "TJ Maxx", "Walgreens",
    "Walmart", "Wendy's", "Whole Foods",
])

DEFAULT_VOLUNTEERS = ["Amy Brown", "James Lee", "Lisa Chen", "Mike Davis", "Sarah Johnson"]


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # EXISTING DATASET
    # ===================
    existing_cards_path: Optional[str] = Field(
        None,
        description="Path to the JSON file holding pre-existing cards, e.g. data/existing_cards.json"
    )

    # ===================
    # SESSION SETTINGS
    # ===================
    session_id_base: int = Field(
        default=9000,
        ge=1,
        description="Lowest identifier handed out to cards added in a session"
    )
    session_ttl_minutes: int = Field(
        default=240,
        ge=1,
        le=1440,
        description="Minutes an idle intake session is kept in memory"
    )
    preview_ttl_minutes: int = Field(
        default=30,
        ge=1,
        le=240,
        description="Minutes a parsed CSV preview waits for confirmation"
    )

    # ===================
    # REFERENCE LISTS
    # ===================
    store_options: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STORE_OPTIONS),
        description="Known store names offered in the store picker"
    )
    volunteers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VOLUNTEERS),
        description="Operators who can be recorded as added-by"
    )

    # ===================
    # BULK IMPORT
    # ===================
    csv_template_filename: str = Field(
        default="gift_card_import_template.csv",
        description="Download filename for the CSV import template"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def dataset_configured(self) -> bool:
        """Check if an existing-cards file is configured."""
        return bool(self.existing_cards_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
