"""Runtime settings for the RPN machine and its command line."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Settings loaded from model defaults, then RPN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RPN_",
        case_sensitive=False,
        extra="ignore",
    )

    precision: int = Field(
        default=100,
        gt=0,
        description="Significant decimal digits used by arithmetic operators",
    )
    strict: bool = Field(
        default=False,
        description="Raise on unknown symbols and unbalanced parentheses instead of skipping them",
    )
    keep_operators: bool = Field(
        default=False,
        description="Keep custom operators declared by one call for later calls on the same machine",
    )
    repl_keep_operators: bool = Field(
        default=True,
        description="keep_operators value used by the interactive loop",
    )
    log_level: LogLevel = Field(default="WARNING", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
