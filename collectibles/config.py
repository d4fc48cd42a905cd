"""
Centralized Configuration Management

This module provides centralized configuration management for the collectibles resolver.
It loads and validates configuration from environment variables and .env files,
grouped into nested sections per concern.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProbeConfig(BaseSettings):
    """Content probe configuration."""

    model_config = SettingsConfigDict(env_prefix="PROBE_")

    timeout_ms: int = 4000
    range_header: str = "bytes=0-100"
    user_agent: str = "collectibles-resolver/0.1"


class GatewayConfig(BaseSettings):
    """Distributed-storage gateway configuration."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_")

    ipfs_url: str = "https://ipfs.io/ipfs"
    arweave_url: str = "https://arweave.net"


class MediaConfig(BaseSettings):
    """Media fallback configuration."""

    model_config = SettingsConfigDict(env_prefix="MEDIA_")

    placeholder_image_url: str = "/img/imageCollectiblePlaceholder2x.webp"


class HeliusConfig(BaseSettings):
    """Helius indexed-asset configuration."""

    model_config = SettingsConfigDict(env_prefix="HELIUS_")

    # Fetch content.json_uri instead of trusting the indexed content fields
    fetch_json_uri: bool = False


class AppConfig(BaseSettings):
    """
    Centralized application configuration with nested sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    log_level: str = "INFO"
    log_format: str = "text"
    log_file: Optional[str] = None

    # Nested configuration sections
    probe: ProbeConfig = ProbeConfig()
    gateway: GatewayConfig = GatewayConfig()
    media: MediaConfig = MediaConfig()
    helius: HeliusConfig = HeliusConfig()


# Global settings instance
def create_settings() -> AppConfig:
    """Create settings instance from environment variables and .env files only."""
    return AppConfig()


settings = create_settings()


def get_settings() -> AppConfig:
    """Get the global settings instance."""
    return settings
