from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STACKENV_", case_sensitive=False)

    config_path: Path = Path("config.yaml")
    dest_root: Path = Field(default_factory=Path.cwd)
    file_mode: str = "0644"
    default_region: str | None = None
    aws_cli: str = "aws"
