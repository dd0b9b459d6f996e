"""Settings for linkconv — CLI flags, environment, and ``linkconv.toml``.

Precedence, highest first: CLI flags, ``LINKCONV_*`` environment
variables (``LINKCONV_LINKS__KEEP_MTIME=true``), ``linkconv.toml``,
built-in defaults.

The config file is ``--config`` when given, else the file named by
``LINKCONV_CONFIG``, else the nearest ``linkconv.toml`` walking up from the
vault folder (or the working directory).

The vault root is ``--vault`` when given, else ``[vault] root`` (relative
to the config file), else the folder holding the config file, else the
working directory.

The link format preference lives here and is handed to the rewrite
functions as an explicit argument; the domain layer never reads it.
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from linkconv.config.models import LinksConfig, VaultConfig

CONFIG_FILENAME = "linkconv.toml"
CONFIG_ENV_VAR = "LINKCONV_CONFIG"

# Parsed TOML tables for the settings object under construction.
_pending_tables: ContextVar[dict[str, Any] | None] = ContextVar(
    "linkconv_pending_tables", default=None
)


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``linkconv.toml`` governing *start* (default: cwd).

    A ``LINKCONV_CONFIG`` path wins over the walk-up; if it names a file
    that does not exist, no config file is used at all.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for folder in (here, *here.parents):
        candidate = folder / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* as TOML; no path reads as an empty table.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    if path is None:
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


def resolve_vault_root(
    explicit: Path | None, config_path: Path | None, tables: dict[str, Any]
) -> Path:
    """Pick the vault folder from ``--vault``, the config file, or the cwd."""
    if explicit is not None:
        return explicit.resolve()
    if config_path is None:
        return Path.cwd().resolve()
    base = config_path.resolve().parent
    configured = tables.get("vault", {}).get("root")
    return (base / configured).resolve() if configured else base


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Hand the parsed ``linkconv.toml`` tables to pydantic-settings.

    Top-level keys that are not settings fields are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], tables: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._tables = {k: v for k, v in tables.items() if k in settings_cls.model_fields}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class LinkSettings(BaseSettings):
    """Unified settings for the linkconv CLI.

    Attributes:
        vault_root: Resolved vault directory.
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LINKCONV_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    links: LinksConfig = Field(default_factory=LinksConfig)
    vault: VaultConfig = Field(default_factory=VaultConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        tables = _pending_tables.get() or {}
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, tables))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> LinkSettings:
        """Build settings for one CLI invocation.

        Raises:
            click.ClickException: If an explicit *config_path* does not
                exist or the config file is not valid TOML.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(vault_root)

        tables = read_config(toml_path)
        token = _pending_tables.set(tables)
        try:
            return cls(
                vault_root=resolve_vault_root(vault_root, toml_path, tables),
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _pending_tables.reset(token)
