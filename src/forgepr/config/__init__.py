"""Configuration loading and schema definitions.

Usage:
    from forgepr.config import load_config, Config

    config = load_config()  # Auto-discovers config file
    config = load_config("/path/to/config.yaml")  # Explicit path
"""

from forgepr.config.loader import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    EnvironmentVariableError,
    discover_config_path,
    load_config,
)
from forgepr.config.schema import (
    Config,
    CreateRetryConfig,
    GitHubConfig,
    RepositoryConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "CreateRetryConfig",
    "EnvironmentVariableError",
    "GitHubConfig",
    "RepositoryConfig",
    "discover_config_path",
    "load_config",
]
