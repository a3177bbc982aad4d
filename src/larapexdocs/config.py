"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (LARAPEXDOCS__CACHE__TTL_SECONDS=0)
  2. larapexdocs.yaml       (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_BASE_URL = "https://larapex-charts.netlify.app"
DEFAULT_MAX_CONTENT_SIZE = 15000
DEFAULT_CACHE_DIR = ".cache"
DEFAULT_CACHE_TTL_SECONDS = 3600


def _find_config_file() -> str | None:
    """Return the path of the first larapexdocs.yaml found, or None."""
    candidates = [
        Path("larapexdocs.yaml"),
        Path(platformdirs.user_config_dir("larapexdocs")) / "larapexdocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class DocsSettings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    max_content_size: int = Field(default=DEFAULT_MAX_CONTENT_SIZE, ge=0)
    title_suffix: str = " - Larapex Charts"


class CacheSettings(BaseModel):
    dir: str = DEFAULT_CACHE_DIR
    # <= 0 disables caching entirely
    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0
    max_attempts: int = Field(default=1, ge=1)
    backoff_seconds: float = Field(default=0.5, ge=0)
    max_redirects: int = Field(default=20, ge=0)
    # Hosts besides the docs host that redirects may land on
    redirect_hosts: list[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LARAPEXDOCS__DOCS__BASE_URL=...
        env_prefix="LARAPEXDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    docs: DocsSettings = DocsSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
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
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
