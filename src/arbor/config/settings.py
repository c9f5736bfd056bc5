"""Interpreter settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InterpreterSettings(BaseSettings):
    """Evaluation and driver settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ARBOR_",
        case_sensitive=False,
        extra="ignore",
    )

    hoist_definitions: bool = Field(default=True)
    raw_display: bool = Field(default=False)
    recursion_limit: int = Field(default=20000, ge=1000)


def load_settings(**overrides: Any) -> InterpreterSettings:
    """Load settings, applying explicit overrides that are not None."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return InterpreterSettings(**values)
