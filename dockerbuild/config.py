"""Configuration settings for dockerbuild.

Uses pydantic-settings for config parsing from environment variables,
the registry config file and defaults. Configuration precedence:
CLI flags > env vars > registry config file > defaults.

The registry config file is a plain `KEY=value` file (shell-style
`export` prefixes and quotes are accepted) that usually only sets
DOCKER_REGISTRY and DOCKER_NAMESPACE.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = "registry.hub.docker.com"


def _default_config_file() -> Path:
    """Return the default registry config file."""
    return Path.cwd() / "config" / "registry.conf"


def _default_cache_dir() -> Path:
    """Return the default buildx layer cache directory."""
    return Path.home() / ".cache" / "dockerbuild" / "buildx_cache"


def _default_platforms() -> list[str]:
    return ["linux/amd64", "linux/arm64"]


class Settings(BaseSettings):
    """Application settings.

    Tool settings are loaded from environment variables with the
    DOCKERBUILD_ prefix. Registry settings use the unprefixed
    DOCKER_REGISTRY and DOCKER_NAMESPACE names so the same registry
    config file can be shared with other scripts.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCKERBUILD_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # Registry
    docker_registry: str = Field(
        default="",
        validation_alias="DOCKER_REGISTRY",
        description="Registry host prepended to image names (empty = default registry)",
    )
    docker_namespace: str = Field(
        default="",
        validation_alias="DOCKER_NAMESPACE",
        description="Namespace prepended to image names",
    )

    # Paths
    config_file: Path = Field(
        default_factory=_default_config_file,
        description="Registry config file providing DOCKER_REGISTRY/DOCKER_NAMESPACE",
    )
    cache_dir: Path = Field(
        default_factory=_default_cache_dir,
        description="Local layer cache directory for multi-arch builds",
    )

    # Engine
    docker_bin: str = Field(
        default="docker",
        description="Container engine executable",
    )
    builder_name: str = Field(
        default="multiarch",
        min_length=1,
        description="Name of the ephemeral buildx builder",
    )
    platforms: list[str] = Field(
        default_factory=_default_platforms,
        min_length=1,
        description="Target platforms for multi-arch builds",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings(config_file: Path | None = None) -> Settings:
    """Load settings, reading the registry config file if present.

    Args:
        config_file: Registry config file; falls back to
            DOCKERBUILD_CONFIG_FILE or ./config/registry.conf.

    Returns:
        Settings instance. A missing config file only logs a warning.
    """
    if config_file is None:
        config_file = Settings().config_file

    if config_file.is_file():
        settings = Settings(config_file=config_file, _env_file=config_file)
    else:
        logger.warning(
            "%s not found, create file before using this script!", config_file
        )
        settings = Settings(config_file=config_file)

    if not settings.docker_registry:
        logger.warning("DOCKER_REGISTRY not set, using default (%s)", DEFAULT_REGISTRY)

    return settings


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["DEFAULT_REGISTRY", "Settings", "get_settings", "print_settings_json"]
