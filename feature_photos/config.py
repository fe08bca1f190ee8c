"""
Configuration management for the feature photo resolution service.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HTTPSettings(BaseSettings):
    """Settings for the shared JSON fetch client."""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout: float = 30.0  # seconds
    max_retries: int = 1  # total attempts; 1 = no retry
    retry_delay: float = 1.0  # seconds
    user_agent: str = "FeaturePhotos/1.0 (feature photo resolver)"

    # Response cache
    cache_ttl: int = 900  # 15 minutes
    cache_max_size: int = 1000

    @field_validator("max_retries")
    @classmethod
    def at_least_one_attempt(cls, v):
        """A fetch always makes at least one attempt."""
        return max(1, v)


class SourceSettings(BaseSettings):
    """Endpoints and parameters of the photo providers."""

    model_config = SettingsConfigDict(
        env_prefix="PHOTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Mapillary
    mapillary_api_url: str = "https://a.mapillary.com/v3/images"
    mapillary_client_id: str = "TTdNZ2w5eTF6MEtCNUV3OWNhVER2dzpjMjdiZGE1MWJmYzljMmJi"

    # Wiki family
    wikidata_api_url: str = "https://www.wikidata.org/w/api.php"
    commons_api_url: str = "https://commons.wikimedia.org/w/api.php"
    wikipedia_api_url: str = "https://{lang}.wikipedia.org/w/api.php"
    default_wikipedia_lang: str = "en"
    thumb_width: int = 640

    # Fody photo database
    fody_url: str = "https://osm.fit.vutbr.cz/fody"
    fody_distance: int = 50
    fody_limit: int = 1

    # Upper bound for a single provider call, in seconds
    source_timeout: float = 10.0


class APISettings(BaseSettings):
    """API server settings."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-settings
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    sources: SourceSettings = Field(default_factory=SourceSettings)
    api: APISettings = Field(default_factory=APISettings)

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()
