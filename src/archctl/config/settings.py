"""ArchSettings: the single settings object every command receives.

Values are layered, first hit wins:

* keyword arguments (the CLI flags Click parsed)
* ``ARCHCTL_*`` environment variables, ``__`` separating nested keys
  (``ARCHCTL_ROUTING__ON_NO_MATCH=fallback``)
* the ``archctl.toml`` located by :func:`archctl.config.discovery.find_config`
* defaults declared on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from archctl.config.discovery import find_config
from archctl.config.models import CatalogConfig, McpConfig, PluginsConfig, RoutingConfig

# Pydantic builds sources from a classmethod, so the file chosen by
# from_cli() travels there through this variable.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``archctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class ArchSettings(BaseSettings):
    """Settings for one archctl invocation (CLI command or MCP server).

    ``project_root`` is where ``.archctl/`` lives: ``--project-root`` when
    given, else the directory holding the loaded config, else the cwd.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="ARCHCTL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_plugins: bool = False

    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, _read_toml(_active_toml.get()))
        return init_settings, env_settings, toml

    @property
    def plugins_enabled(self) -> bool:
        return self.plugins.enabled and not self.no_plugins

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> ArchSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather than
        triggering discovery; without one, discovery starts at *project_root*.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = Path.cwd() if toml_path is None else toml_path.parent

        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)
