"""Configuration management for ReviewDesk."""

from typing import List

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Hostaway API
    hostaway_account_id: str = Field("", description="Hostaway account ID")
    hostaway_api_key: str = Field("", description="Hostaway API bearer token")
    hostaway_base_url: str = Field("https://api.hostaway.com/v1", description="Hostaway API base URL")

    # Google Places API
    google_places_api_key: str = Field("", description="Google Places API key")
    google_places_base_url: str = Field(
        "https://maps.googleapis.com/maps/api/place",
        description="Google Places API base URL"
    )
    places_query_suffixes: List[str] = Field(
        default_factory=lambda: ["apartment London", "hotel London"],
        description="Suffixes tried when a property code does not match a place directly"
    )

    # Caching
    places_cache_ttl: int = Field(24 * 60 * 60, description="Places response cache lifetime in seconds")
    cache_dir: str = Field("", description="Places cache directory (empty = per-process temp dir)")

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Network settings
    request_timeout: float = Field(10.0, description="HTTP request timeout in seconds")
    max_retries: int = Field(3, description="Maximum retry attempts for transient Hostaway errors")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")

    @property
    def hostaway_configured(self) -> bool:
        """Both Hostaway credentials are present."""
        return bool(self.hostaway_account_id and self.hostaway_api_key)

    @property
    def google_places_configured(self) -> bool:
        return bool(self.google_places_api_key)

    def missing_credentials(self) -> List[str]:
        """Names of the credential variables that are not set."""
        required = {
            "HOSTAWAY_ACCOUNT_ID": self.hostaway_account_id,
            "HOSTAWAY_API_KEY": self.hostaway_api_key,
            "GOOGLE_PLACES_API_KEY": self.google_places_api_key,
        }
        return [name for name, value in required.items() if not value]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
