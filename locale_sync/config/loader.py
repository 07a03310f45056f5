"""Configuration loading."""

from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from locale_sync.errors import ConfigurationError

from .settings import Settings

logger = structlog.get_logger(__name__)


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """Load settings from the environment, an optional env file and overrides.

    Args:
        config_file: Path to a dotenv-style file, replaces the default ``.env``
        **overrides: Values that take precedence over every other source

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file is missing or a value is invalid
    """
    if config_file is not None and not Path(config_file).is_file():
        raise ConfigurationError(
            f"Configuration file not found: {config_file}", config_key="config_file"
        )

    overrides = {key: value for key, value in overrides.items() if value is not None}

    try:
        if config_file is not None:
            settings = Settings(_env_file=str(config_file), **overrides)
        else:
            settings = Settings(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg')}", config_key=key or None, previous_error=e
        ) from e

    logger.debug(
        "Configuration loaded",
        config_file=str(config_file) if config_file else None,
        base_locale=settings.base_locale,
        max_concurrency=settings.max_concurrency,
    )
    return settings
