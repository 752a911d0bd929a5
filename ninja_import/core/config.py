"""
Runtime settings.

Settings come from keyword arguments or from NINJA_IMPORT_* environment
variables. A non-positive max_bytes means "unlimited".
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

# Default input size limit (can be overridden via flag/env).
DEFAULT_MAX_BYTES = 100 * 1024 * 1024  # 100 MiB

DEFAULT_APP_NAME = "Invoice Ninja"

ENV_MAX_BYTES = "NINJA_IMPORT_MAX_BYTES"
ENV_APP_NAME = "NINJA_IMPORT_APP_NAME"


class ConfigError(ValueError):
    """Invalid configuration value."""


class ImportSettings(BaseModel, frozen=True):
    """Settings shared by the reader and the CLI."""

    max_bytes: int | None = Field(
        default=DEFAULT_MAX_BYTES,
        description="Maximum upload size in bytes, None for unlimited",
    )
    app_name: str = Field(
        default=DEFAULT_APP_NAME,
        min_length=1,
        description="Application name marking an export preamble in the first cell",
    )
    preview_rows: int = Field(
        default=2,
        ge=1,
        description="Number of leading rows returned as headers on pre-import",
    )

    model_config = {"frozen": True}

    @field_validator("max_bytes")
    @classmethod
    def _non_positive_is_unlimited(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            return None
        return value

    @classmethod
    def from_env(cls, *, max_bytes: int | None = None) -> ImportSettings:
        """
        Build settings from the environment.

        Args:
            max_bytes: Explicit limit that takes precedence over the environment

        Raises:
            ConfigError: If NINJA_IMPORT_MAX_BYTES is not an integer
        """
        values: dict[str, object] = {}

        if max_bytes is not None:
            values["max_bytes"] = max_bytes
        else:
            env_value = os.environ.get(ENV_MAX_BYTES)
            if env_value:
                try:
                    values["max_bytes"] = int(env_value)
                except ValueError:
                    raise ConfigError(f"{ENV_MAX_BYTES} must be an integer") from None

        app_name = os.environ.get(ENV_APP_NAME)
        if app_name:
            values["app_name"] = app_name

        return cls(**values)  # type: ignore[arg-type]
