"""
DualDraft - Configuration Management

This module provides configuration management including:
- YAML configuration loading and validation
- Environment variable handling (.env via python-dotenv)
- Configuration defaults and DUALDRAFT_* overrides
"""

from dualdraft.config.environment import load_environment, reset_environment
from dualdraft.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATHS,
    ENV_VAR_OVERRIDES,
    STRING_OVERRIDES,
    ConfigLoader,
    ConfigurationError,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
)
from dualdraft.config.models import (
    DEFAULT_CONVERGENCE_THRESHOLD,
    DEFAULT_MAX_ROUNDS,
    DualDraftConfig,
    EngineConfig,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    # Config models
    "EngineConfig",
    "LoggingConfig",
    "LogLevel",
    "DualDraftConfig",
    "DEFAULT_MAX_ROUNDS",
    "DEFAULT_CONVERGENCE_THRESHOLD",
    # Loader
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
    "load_config_from_env",
    "get_config",
    "reset_config",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATHS",
    "ENV_VAR_OVERRIDES",
    "STRING_OVERRIDES",
    # Environment
    "load_environment",
    "reset_environment",
]
