"""
Configuration Data Models.

Defines all configuration schemas using Pydantic for validation
and type safety.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_ROUNDS = 3
DEFAULT_CONVERGENCE_THRESHOLD = 88


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class EngineConfig(BaseModel):
    """Configuration for the orchestration engine.

    Attributes:
        max_rounds: Hard cap on rounds (and therefore on generation calls)
        convergence_threshold: Score (0-100) at which the run stops early
        parallel_agents: Run both agents' drafts and critiques concurrently
        round_timeout_seconds: Per-round time limit (None = no limit)
    """

    model_config = ConfigDict(validate_assignment=True)

    max_rounds: int = Field(
        default=DEFAULT_MAX_ROUNDS,
        ge=1,
        le=20,
        description="Maximum number of rounds",
    )
    convergence_threshold: int = Field(
        default=DEFAULT_CONVERGENCE_THRESHOLD,
        ge=0,
        le=100,
        description="Convergence score that stops iteration",
    )
    parallel_agents: bool = Field(
        default=False,
        description="Run the two agents concurrently within a round",
    )
    round_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for a single round in seconds",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Minimum level for package loggers
        format: Log record format string
        file: Optional file to also write log records to
    """

    model_config = ConfigDict(validate_assignment=True)

    level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    format: str = Field(default="%(message)s", description="Log format")
    file: str | None = Field(default=None, description="Optional log file path")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class DualDraftConfig(BaseModel):
    """Root configuration for the whole system.

    Attributes:
        engine: Engine configuration
        logging: Logging configuration
        debug: Enable debug mode
    """

    engine: EngineConfig = Field(
        default_factory=EngineConfig,
        description="Engine configuration",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to YAML-friendly dictionary.

        Returns:
            Dict suitable for YAML serialization
        """
        return self.model_dump(mode="json", exclude_none=True)
