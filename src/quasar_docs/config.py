"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (QUASAR_DOCS__LOGGING__LEVEL=DEBUG)
  2. quasar-docs.yaml       (searched in cwd, then the user config dir)
  3. Hardcoded defaults

The config file is optional: all fields have sensible defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_CONFIG_FILE_NAME = "quasar-docs.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("quasar-docs")


def _find_config_file() -> str | None:
    """Return the path of the first quasar-docs.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILE_NAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILE_NAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class _Section(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ServerSettings(_Section):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class GitHubSettings(_Section):
    raw_base_url: str = (
        "https://raw.githubusercontent.com/quasarframework/quasar/dev/docs/src/pages"
    )
    api_base_url: str = (
        "https://api.github.com/repos/quasarframework/quasar/contents/docs/src/pages"
    )
    # Path prefix the contents API puts in front of every entry path
    api_path_prefix: str = "docs/src/pages/"
    token: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0)

    def resolved_token(self) -> str | None:
        """Configured token, falling back to the conventional GITHUB_TOKEN variable."""
        return self.token or os.environ.get("GITHUB_TOKEN") or None


class DocsSettings(_Section):
    public_base_url: str = "https://quasar.dev"
    components_section: str = "vue-components"


class CacheSettings(_Section):
    content_ttl_minutes: int = Field(default=30, ge=0)
    index_ttl_minutes: int = Field(default=60, ge=0)


class SearchSettings(_Section):
    overfetch_margin: int = Field(default=10, ge=0)
    content_search_max_pages: int = Field(default=50, ge=0)
    character_limit: int = Field(default=25_000, ge=1_000)


class LoggingSettings(_Section):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: QUASAR_DOCS__GITHUB__TOKEN=...
        env_prefix="QUASAR_DOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    github: GitHubSettings = GitHubSettings()
    docs: DocsSettings = DocsSettings()
    cache: CacheSettings = CacheSettings()
    search: SearchSettings = SearchSettings()
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
