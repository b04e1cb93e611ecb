"""
Configuration management for LinkGraph.

Loads configuration from the project config.yaml and provides settings.
Environment variables (LINKGRAPH_*) take precedence over the YAML file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

ENV_PREFIX = "LINKGRAPH_"


class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    api_title: str = "LinkGraph API"
    api_version: str = "1.0.0"
    api_description: str = "Bounded-depth Wikipedia link graphs"

    # Server Settings
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS Settings
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Wikipedia Settings
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    user_agent: str = "LinkGraph/1.0 (Educational Project)"
    request_timeout: float = 30.0
    page_limit: int = 500

    # Graph Settings
    default_depth: int = 0
    max_depth: int = 5
    max_topic_length: int = 50
    max_concurrency: int = 0

    # API Settings
    rate_limit: str = "20/minute"
    log_level: str = "INFO"

    model_config = {"env_prefix": ENV_PREFIX}


# Maps settings fields to their (section, key) location in config.yaml
_YAML_FIELDS: dict[str, tuple[str, str]] = {
    "wikipedia_api_url": ("wikipedia", "api_url"),
    "user_agent": ("wikipedia", "user_agent"),
    "request_timeout": ("wikipedia", "timeout"),
    "page_limit": ("wikipedia", "page_limit"),
    "default_depth": ("graph", "default_depth"),
    "max_depth": ("graph", "max_depth"),
    "max_topic_length": ("graph", "max_topic_length"),
    "max_concurrency": ("graph", "max_concurrency"),
    "rate_limit": ("api", "rate_limit"),
    "log_level": ("api", "log_level"),
}


def default_config_path() -> Path:
    """Location of config.yaml, overridable with LINKGRAPH_CONFIG_PATH."""
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_path:
        return Path(env_path)

    # Project root is one level above linkgraph/
    return Path(__file__).parent.parent / "config.yaml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        config_path: Explicit path; defaults to default_config_path()

    Returns:
        Configuration dictionary (empty when the file does not exist)
    """
    path = config_path or default_config_path()

    if not path.exists():
        logger.debug(f"Config file not found: {path}, using defaults")
        return {}

    with open(path) as f:
        config = yaml.safe_load(f)

    return config or {}


def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get application settings.

    Returns:
        Settings instance with YAML values applied wherever no
        environment variable overrides them
    """
    settings = Settings()
    config = load_config(config_path)

    for field, (section, key) in _YAML_FIELDS.items():
        if f"{ENV_PREFIX}{field.upper()}" in os.environ:
            continue

        value = (config.get(section) or {}).get(key)
        if value is not None:
            setattr(settings, field, type(getattr(settings, field))(value))

    return settings


# Global settings instance
settings = get_settings()
