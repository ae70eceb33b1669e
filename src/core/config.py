"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP prober) and services read the same configuration contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "m3u-checker"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "m3u-checker"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "m3u-checker"
    return Path.home() / ".config" / "m3u-checker"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars), so the core never re-checks.
    - One configuration contract shared by the CLI, the prober and the checker.
    """

    model_config = SettingsConfigDict(
        env_prefix="M3U_CHECKER_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the per-user one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    playlist_path: Path = Field(
        default=Path("free.m3u"),
        description="Playlist checked when no path is given on the command line.",
    )
    request_timeout_ms: int = Field(
        default=10_000,
        gt=0,
        description="Timeout for each network attempt (milliseconds).",
    )
    max_retries: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Maximum network attempts per stream.",
    )
    delay_between_requests_ms: int = Field(
        default=1_000,
        ge=0,
        description="Pause between streams and base of the linear retry backoff (milliseconds).",
    )
    range_bytes: int = Field(
        default=1024,
        ge=0,
        description="Upper bound of the Range header used by the GET fallback.",
    )
    user_agent: str = Field(
        default="M3U-Checker/1.0",
        min_length=1,
        description="User-Agent sent with every probe.",
    )

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000

    @property
    def delay_between_requests_seconds(self) -> float:
        return self.delay_between_requests_ms / 1000
