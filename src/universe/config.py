"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Content source
    data_dir: str = Field(
        default="data",
        description="Local directory holding per-language document trees"
    )
    data_base_url: str | None = Field(
        default=None,
        description="Remote base URL; when set, documents are fetched over HTTP"
    )
    entry_document: str = "universe.json"
    default_language: str = "zh"
    languages: list[str] = Field(default_factory=lambda: ["en", "zh"])

    # External references
    reference_suffix: str = Field(
        default=".json",
        description="Child ids ending with this suffix are spliced from another document"
    )
    reference_base_url: str | None = Field(
        default=None,
        description="Fixed base for referenced documents; None resolves relative to the parent document"
    )
    reject_duplicate_ids: bool = Field(
        default=False,
        description="Fail resolution when a node id occurs more than once"
    )

    # Fetching
    fetch_timeout: float = 10.0
    fetch_max_concurrent: int = 8
    fetch_retries: int = 2

    # Projection
    seed_radius: float = Field(
        default=10.0,
        description="Distance between a parent and its children's seed positions"
    )

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    log_level: str = "INFO"


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        data_dir="data",
        data_base_url=None,
        api_debug=True,
        log_level="DEBUG",
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        data_dir="tests/fixtures/universe",
        data_base_url=None,
        default_language="en",
        fetch_retries=0,
        fetch_timeout=1.0,
    )


# Global settings instance
settings = Settings()
