"""Dispatch engine settings using pydantic-settings.

Environment Variables:
    INVOKER_CACHE_METHODS - Cache resolved methods per call shape (default: true)
    INVOKER_SEARCH_NON_PUBLIC - Fall back to underscore-prefixed methods (default: true)
    INVOKER_LOG_ARGUMENTS - Include argument reprs in debug logs (default: false)
    INVOKER_LOG_LEVEL - Logging level used by the CLI (default: WARNING)

Example:
    export INVOKER_LOG_LEVEL=DEBUG
    export INVOKER_LOG_ARGUMENTS=true
    python -m invoker candidates myapp.services:UserService get_user
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["InvokerSettings"]


class InvokerSettings(BaseSettings):
    """Settings for a `DispatchEngine`."""

    model_config = SettingsConfigDict(env_prefix="INVOKER_", frozen=True)

    cache_methods: bool = Field(
        default=True, description="Cache resolved methods per call shape"
    )
    search_non_public: bool = Field(
        default=True,
        description="Search every class level, including underscore-prefixed methods",
    )
    log_arguments: bool = Field(
        default=False, description="Include argument reprs in debug logs"
    )
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def configure_logging(self) -> None:
        """Install a basic stderr handler at `log_level`."""
        logging.basicConfig(
            level=self.log_level,
            format="[%(asctime)s] [%(levelname)-5s] [%(name)s:%(lineno)d] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
