"""
Pydantic-based environment settings for SkyVault.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from skyvault.config.profiles import Profile


class SkyVaultSettings(BaseSettings):
    """
    Environment-driven settings for building clients.

    Configuration can be provided via:
    - Environment variables with SKYVAULT_ prefix
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        settings = SkyVaultSettings()
        client = await CacheClient.from_settings(settings)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="SKYVAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: SecretStr | None = None
    endpoint: str | None = None
    profile: Profile = Profile.LAPTOP
    default_ttl_seconds: int = Field(default=60, ge=1)
    eager_connect_timeout_seconds: float = Field(default=30.0, ge=0)
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


@lru_cache
def get_settings(env_file: str | None = None) -> SkyVaultSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return SkyVaultSettings(_env_file=env_file)

    return SkyVaultSettings()


def load_settings_from_yaml(yaml_path: Path) -> SkyVaultSettings:
    """
    Load settings from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        Settings instance
    """
    import yaml

    with open(yaml_path) as f:
        config_dict = yaml.safe_load(f) or {}

    return SkyVaultSettings(**config_dict)
