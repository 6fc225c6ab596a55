"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP, rendering) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://jsonplace-univclone.herokuapp.com"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "userdeck"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "userdeck"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "userdeck"
    return Path.home() / ".config" / "userdeck"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without leaking into the Core.
    - A single configuration contract for CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="USERDECK_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the JSONPlaceholder-style REST API.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds (unset: wait indefinitely).",
    )
    user_agent: str = Field(
        default="userdeck/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Level for the `userdeck` logger (case-insensitive).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value
