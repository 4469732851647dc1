"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `NOTEMAP_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from notemap.models.diagram import ConnectorStyle, Orientation


class Settings(BaseSettings):
    """notemap settings.

    All fields are environment-configurable. Prefix is `NOTEMAP_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTEMAP_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # HTTP server
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, ge=1, le=65535)

    # Diagram defaults
    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    connector_style: ConnectorStyle = Field(default=ConnectorStyle.ORTHOGONAL)
    max_level: int = Field(default=5, ge=1, le=20)

    # Layout
    horizontal_level_spacing: float = Field(default=280.0, gt=0)
    vertical_level_spacing: float = Field(default=200.0, gt=0)
    min_spacing: float = Field(default=80.0, gt=0)

    # Node boxes and connectors
    node_min_width: float = Field(default=120.0, gt=0)
    node_char_width: float = Field(default=8.0, ge=0)
    node_padding: float = Field(default=40.0, ge=0)
    node_height: float = Field(default=60.0, gt=0)
    curve_offset: float = Field(default=50.0, ge=0)
    label_max_chars: int = Field(default=15, ge=1, le=200)

    # Sessions
    sessions_dir: Path = Field(default=Path("sessions"))
    session_backend: Literal["file", "redis"] = Field(default="file")
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_key_prefix: str = Field(default="notemap")


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("NOTEMAP_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
