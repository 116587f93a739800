"""
Environment Configuration
Handles environment-specific settings (dev, prod, test) and logging setup.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Environment(str, Enum):
    """Application environment modes."""
    DEVELOPMENT = "dev"
    PRODUCTION = "prod"
    TEST = "test"


@dataclass(frozen=True)
class EnvironmentConfig:
    """Environment-specific configuration."""

    debug: bool = False
    log_level: str = "INFO"


_CONFIGS = {
    Environment.DEVELOPMENT: EnvironmentConfig(debug=True, log_level="DEBUG"),
    Environment.PRODUCTION: EnvironmentConfig(debug=False, log_level="INFO"),
    Environment.TEST: EnvironmentConfig(debug=True, log_level="DEBUG"),
}

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def get_environment() -> Environment:
    """
    Get the current environment from the DAYZDM_ENV variable.

    Returns:
        Environment enum value, defaults to PRODUCTION
    """
    env_str = os.environ.get("DAYZDM_ENV", "prod").lower()
    try:
        return Environment(env_str)
    except ValueError:
        return Environment.PRODUCTION


def get_config() -> EnvironmentConfig:
    """Get the configuration for the current environment."""
    return _CONFIGS.get(get_environment(), _CONFIGS[Environment.PRODUCTION])


def is_development() -> bool:
    """Check if running in development mode."""
    return get_environment() == Environment.DEVELOPMENT


def setup_logging(level: Optional[str] = None) -> int:
    """
    Configure the root logger for the application.

    Args:
        level: Explicit level name; falls back to the environment's level.

    Returns:
        The numeric level that was applied.
    """
    name = (level or get_config().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric
