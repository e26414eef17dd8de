"""
Configuration settings for the deal insights backend.

Uses pydantic-settings for environment variable loading (prefix
``DEAL_INSIGHTS_``), with an optional YAML file underneath the environment.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "DEAL_INSIGHTS_"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    deals_dir: Path = Path("data/deals")

    # Batch execution: None runs every request of a batch at once
    batch_max_workers: Optional[int] = None

    # DuckDB Configuration
    duckdb_memory_limit: str = "4GB"
    duckdb_threads: int = 4

    # API Configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_debug: bool = False

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str) -> "Settings":
        """
        Load settings from a YAML file.

        Environment variables still take precedence over values in the file.
        A missing file yields the defaults.
        """
        config_path = Path(path)

        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}

        # Init kwargs beat the environment in pydantic-settings, so drop
        # every key the environment already sets.
        overridden = {
            name for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls(**{k: v for k, v in data.items() if k not in overridden})


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings

    if _settings is None:
        config_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
        if config_path:
            _settings = Settings.from_yaml(config_path)
        else:
            _settings = Settings()

    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """Reload settings from the environment, or from a YAML file."""
    global _settings

    if config_path:
        _settings = Settings.from_yaml(config_path)
        return _settings

    _settings = None
    return get_settings()
