"""Environment-based configuration for the placement CLI."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from placement_core.types import StrategyType

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Placement configuration.

    All settings can be overridden via environment variables with
    PLACEMENT_ prefix. For example:
        PLACEMENT_LOG_LEVEL=DEBUG
        PLACEMENT_DEFAULT_STRATEGY=Aggregated
    """

    # Root logger level for CLI runs
    log_level: LogLevel = "WARNING"

    # Division strategy for requests that do not name one
    default_strategy: StrategyType = StrategyType.DYNAMIC_WEIGHT

    # Print JSON instead of a table
    json_output: bool = False

    model_config = {"env_prefix": "PLACEMENT_"}

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


settings = Settings()
