"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from tfmhook.utils.platform import get_config_dir


class RepositoryTarget(BaseModel):
    """A local checkout refreshed with ``git pull`` on every delivery."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    path: str
    branch: str = "main"


class Settings(BaseSettings):
    # Unprefixed names: PORT, LOG_LEVEL, GITHUB_WEBHOOK_SECRET, REPOSITORIES,
    # DOCKER_SERVICES. List fields are read from the environment as JSON.
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    port: int = 3000
    bind: str = "0.0.0.0"
    log_level: str = "info"
    log_json: bool = False
    github_webhook_secret: str = ""
    repositories: list[RepositoryTarget] = Field(default_factory=list)
    docker_services: list[str] = Field(default_factory=list)
    command_timeout: float = Field(default=300.0, gt=0)

    @model_validator(mode="after")
    def _unique_repository_names(self) -> "Settings":
        seen: set[str] = set()
        for repo in self.repositories:
            if repo.name in seen:
                raise ValueError(f"duplicate repository name: {repo.name}")
            seen.add(repo.name)
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats YAML (which arrives as init kwargs)
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @property
    def has_secret(self) -> bool:
        return bool(self.github_webhook_secret)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("TFMHOOK_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)
