"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Secrets are optional at import time; services check them on first use.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


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
    # COMPLETION MODEL
    # ===================
    anthropic_api_key: Optional[str] = Field(
        None,
        description="Anthropic API key for the completion model"
    )
    llm_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used to interpret merchant commands"
    )
    llm_max_tokens: int = Field(
        default=1024,
        ge=64,
        le=8192,
        description="Maximum tokens for the model reply"
    )

    # ===================
    # SHOPIFY
    # ===================
    shopify_shop_domain: Optional[str] = Field(
        None,
        description="Store domain, e.g. my-store.myshopify.com"
    )
    shopify_access_token: Optional[str] = Field(
        None,
        description="Admin API access token for the store session"
    )
    shopify_api_version: str = Field(
        default="2024-10",
        pattern=r"^\d{4}-\d{2}$|^unstable$",
        description="Admin GraphQL API version"
    )
    shopify_request_timeout: int = Field(
        default=30,
        ge=1,
        le=120,
        description="Timeout in seconds for Admin API calls"
    )

    # ===================
    # CATALOG
    # ===================
    catalog_page_size: int = Field(
        default=10,
        ge=1,
        le=250,
        description="Number of products loaded into the snapshot"
    )
    verify_snapshot_before_update: bool = Field(
        default=False,
        description="Re-read the matched product before mutating it"
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
        description="Enable debug mode (exposes error diagnostics)"
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
    def llm_configured(self) -> bool:
        """Check if the completion model key is set."""
        return bool(self.anthropic_api_key)

    @property
    def shopify_configured(self) -> bool:
        """Check if a store session is configured."""
        return bool(self.shopify_shop_domain and self.shopify_access_token)


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
