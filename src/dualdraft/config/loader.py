"""
Configuration Loader.

Loads and validates configuration from YAML files with environment
variable substitution. Every setting has a default, so running without
any configuration file is valid.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dualdraft.config.environment import load_environment
from dualdraft.config.models import DualDraftConfig
from dualdraft.exceptions import DualDraftError

logger = logging.getLogger(__name__)

# Default configuration file locations
DEFAULT_CONFIG_PATHS = [
    "dualdraft.yaml",
    "dualdraft.yml",
    ".dualdraft.yaml",
    ".dualdraft.yml",
]

# Environment variable for config path
CONFIG_ENV_VAR = "DUALDRAFT_CONFIG"

# Maps env var name to config path (dot-separated)
ENV_VAR_OVERRIDES = {
    "DUALDRAFT_MAX_ROUNDS": "engine.max_rounds",
    "DUALDRAFT_CONVERGENCE_THRESHOLD": "engine.convergence_threshold",
    "DUALDRAFT_PARALLEL_AGENTS": "engine.parallel_agents",
    "DUALDRAFT_ROUND_TIMEOUT": "engine.round_timeout_seconds",
    "DUALDRAFT_LOG_LEVEL": "logging.level",
    "DUALDRAFT_LOG_FILE": "logging.file",
    "DUALDRAFT_DEBUG": "debug",
}

# Overrides whose targets are strings and are passed through uncoerced
STRING_OVERRIDES = frozenset({"DUALDRAFT_LOG_LEVEL", "DUALDRAFT_LOG_FILE"})


class ConfigurationError(DualDraftError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            errors: List of validation errors (from Pydantic)
            path: Path to the config file that caused the error
        """
        super().__init__(message)
        self.errors = errors or []
        self.path = path

    def __str__(self) -> str:
        """Format error message with details."""
        msg = super().__str__()
        if self.path:
            msg = f"{msg} (file: {self.path})"
        if self.errors:
            error_details = []
            for err in self.errors[:5]:
                loc = ".".join(str(x) for x in err.get("loc", []))
                error_msg = err.get("msg", "Unknown error")
                error_details.append(f"  - {loc}: {error_msg}")
            if len(self.errors) > 5:
                error_details.append(f"  ... and {len(self.errors) - 5} more errors")
            msg = f"{msg}\n" + "\n".join(error_details)
        return msg


class ConfigLoader:
    """Loads configuration from YAML files.

    Supports:
    - YAML configuration files
    - Environment variable substitution (${VAR} and ${VAR:-default} syntax)
    - DUALDRAFT_* environment overrides
    - Validation via Pydantic

    Usage:
        loader = ConfigLoader("dualdraft.yaml")
        config = loader.load()

        # Discover from DUALDRAFT_CONFIG or default locations
        config = ConfigLoader().load_from_env()
    """

    # Matches ${VAR_NAME}, ${VAR_NAME:-default} and ${VAR_NAME:default}
    ENV_PATTERN = re.compile(r"\$\{(\w+)(?::-?([^}]*))?\}")

    def __init__(
        self,
        config_path: str | Path | None = None,
        env_file: str = ".env",
    ) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to YAML config file (optional)
            env_file: Path to .env file for environment loading
        """
        self._config_path = Path(config_path) if config_path else None
        self._env_file = env_file
        self._config: DualDraftConfig | None = None
        self._loaded_from_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        """Get config file path."""
        return self._config_path

    @property
    def loaded_from_path(self) -> Path | None:
        """Get the path the config was actually loaded from."""
        return self._loaded_from_path

    @property
    def config(self) -> DualDraftConfig | None:
        """Get loaded configuration, or None if not loaded yet."""
        return self._config

    def load(self, path: str | Path | None = None) -> DualDraftConfig:
        """Load and validate configuration.

        Args:
            path: Optional path overriding the one given at construction.
                With no path at all, defaults plus environment overrides apply.

        Returns:
            Validated DualDraftConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If config file not found
        """
        if path is not None:
            self._config_path = Path(path)

        load_environment(self._env_file)

        if self._config_path:
            raw_config = self._load_yaml()
            self._loaded_from_path = self._config_path
        else:
            raw_config = {}
            self._loaded_from_path = None

        processed = self._substitute_env_vars(raw_config)
        processed = self._apply_env_overrides(processed)
        # YAML parses empty sections as None; drop them so defaults apply
        processed = self._clean_none_values(processed)

        try:
            self._config = DualDraftConfig(**processed)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e.error_count()} errors",
                errors=e.errors(),
                path=self._loaded_from_path,
            ) from e

        logger.debug(f"Configuration loaded from {self._loaded_from_path or 'defaults'}")
        return self._config

    def load_from_env(self) -> DualDraftConfig:
        """Load configuration from DUALDRAFT_CONFIG or default locations.

        Search order:
        1. DUALDRAFT_CONFIG environment variable (if set)
        2. dualdraft.yaml, dualdraft.yml, .dualdraft.yaml, .dualdraft.yml
        3. Built-in defaults

        Returns:
            Validated DualDraftConfig

        Raises:
            ConfigurationError: If config is invalid
            FileNotFoundError: If DUALDRAFT_CONFIG points to a missing file
        """
        load_environment(self._env_file)

        env_config_path = os.environ.get(CONFIG_ENV_VAR)
        if env_config_path:
            config_path = Path(env_config_path)
            if not config_path.exists():
                raise FileNotFoundError(
                    f"Config file specified by {CONFIG_ENV_VAR} not found: {env_config_path}"
                )
            self._config_path = config_path
            return self.load()

        for default_path in DEFAULT_CONFIG_PATHS:
            path = Path(default_path)
            if path.exists():
                self._config_path = path
                return self.load()

        self._config_path = None
        return self.load()

    def reload(self) -> DualDraftConfig:
        """Reload configuration from the previously loaded path.

        Returns:
            Reloaded and validated DualDraftConfig

        Raises:
            RuntimeError: If nothing was loaded before
        """
        if self._config is None:
            raise RuntimeError("Cannot reload: call load() or load_from_env() first.")

        self._config = None
        self._config_path = self._loaded_from_path
        return self.load()

    def save(self, path: str | Path | None = None) -> None:
        """Save current configuration to a YAML file.

        Args:
            path: Path to save to (defaults to the loaded path)

        Raises:
            ValueError: If no config loaded or no path specified
        """
        if self._config is None:
            raise ValueError("No configuration loaded")

        save_path = Path(path) if path else self._config_path
        if save_path is None:
            raise ValueError("No path specified for saving")

        with open(save_path, "w") as f:
            yaml.safe_dump(
                self._config.to_yaml_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def _load_yaml(self) -> dict[str, Any]:
        """Load the YAML configuration file.

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigurationError: If YAML is invalid or not a mapping
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self._config_path}")

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=self._config_path) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping", path=self._config_path
            )
        return data

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute environment variables in config values."""
        if isinstance(data, dict):
            return {k: self._substitute_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            return self._substitute_string(data)
        return data

    def _clean_none_values(self, data: Any) -> Any:
        """Recursively remove None values from nested dicts."""
        if isinstance(data, dict):
            return {k: self._clean_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._clean_none_values(item) for item in data]
        return data

    def _substitute_string(self, value: str) -> Any:
        """Substitute ${VAR} references in a single string.

        A string that is exactly one reference is type-coerced; embedded
        references are substituted as text. Unresolved references are
        left untouched so validation reports them.
        """
        full_match = self.ENV_PATTERN.fullmatch(value)
        if full_match:
            env_value = os.environ.get(full_match.group(1))
            resolved = env_value if env_value is not None else full_match.group(2)
            if resolved is not None:
                return self._coerce_type(resolved)
            return value

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return self.ENV_PATTERN.sub(replace, value)

    def _coerce_type(self, value: str) -> Any:
        """Coerce a string to bool, int, float or None where it looks like one."""
        if value == "":
            return None

        lower_value = value.lower()
        if lower_value in ("true", "yes", "on"):
            return True
        if lower_value in ("false", "no", "off"):
            return False

        try:
            if "." not in value and "e" not in lower_value:
                return int(value)
            return float(value)
        except ValueError:
            return value

    def _apply_env_overrides(self, config_dict: dict[str, Any]) -> dict[str, Any]:
        """Apply DUALDRAFT_* environment variables over file values."""
        for env_var, config_path in ENV_VAR_OVERRIDES.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue
            if env_var in STRING_OVERRIDES:
                value = env_value or None
            else:
                value = self._coerce_type(env_value)
            self._set_nested_value(config_dict, config_path, value)
        return config_dict

    @staticmethod
    def _set_nested_value(config_dict: dict[str, Any], path: str, value: Any) -> None:
        """Set a nested value using dot notation, creating sections as needed."""
        parts = path.split(".")
        current = config_dict
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value


# Global loader instance for caching
_global_loader: ConfigLoader | None = None
_global_config: DualDraftConfig | None = None


def load_config(
    config_path: str | Path | None = None,
    env_file: str = ".env",
) -> DualDraftConfig:
    """Load configuration from a file (or defaults) and cache it globally."""
    global _global_loader, _global_config

    _global_loader = ConfigLoader(config_path, env_file)
    _global_config = _global_loader.load()
    return _global_config


def load_config_from_env(env_file: str = ".env") -> DualDraftConfig:
    """Discover and load configuration, caching it globally."""
    global _global_loader, _global_config

    _global_loader = ConfigLoader(env_file=env_file)
    _global_config = _global_loader.load_from_env()
    return _global_config


def get_config() -> DualDraftConfig:
    """Get the global configuration.

    Raises:
        RuntimeError: If configuration not loaded
    """
    if _global_config is None:
        raise RuntimeError(
            "Configuration not loaded. Call load_config() or load_config_from_env() first."
        )
    return _global_config


def reset_config() -> None:
    """Reset global configuration. Useful for testing."""
    global _global_loader, _global_config
    _global_loader = None
    _global_config = None
