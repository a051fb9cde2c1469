"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (CODELINK__LOOKUP__API_ENDPOINT=https://...)
  2. codelink.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional. With no configuration at all, links are built
from the repository's own git remote.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("codelink")

DEFAULT_CACHE_TIMEOUT_SECONDS = 600


def _find_config_file() -> str | None:
    """Return the path of the first codelink.yaml found, or None."""
    candidates = [
        Path("codelink.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "codelink.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class LookupSettings(BaseModel):
    # Empty means "use the local git remote"
    api_endpoint: str = ""
    timeout_seconds: float = 5.0


class CacheSettings(BaseModel):
    timeout_seconds: int = DEFAULT_CACHE_TIMEOUT_SECONDS


class GitSettings(BaseModel):
    executable: str = "git"
    remote_name: str = "origin"
    timeout_seconds: float = 10.0


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: CODELINK__CACHE__TIMEOUT_SECONDS=60
        env_prefix="CODELINK__",
        env_nested_delimiter="__",
        yaml_file_encoding="utf-8",
    )

    lookup: LookupSettings = LookupSettings()
    cache: CacheSettings = CacheSettings()
    git: GitSettings = GitSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            # Looked up per load so a changed working directory is honoured
            YamlConfigSettingsSource(settings_cls, yaml_file=_find_config_file()),
            # dotenv and file secrets intentionally excluded
        )
