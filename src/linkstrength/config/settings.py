"""LinkSettings — one frozen object for CLI flags, environment and TOML.

Sources, strongest first:

* keyword arguments (the CLI flags Click parsed);
* ``LINKSTRENGTH_*`` environment variables, ``__`` between nested names
  (``LINKSTRENGTH_PREDICT__ALPHA=0.4``);
* the ``linkstrength.toml`` in effect;
* the defaults of the section models.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from linkstrength.config.discovery import find_config
from linkstrength.config.models import GraphConfig, PredictConfig, WalksConfig

# Config file for the LinkSettings instance under construction.
_toml_file: ContextVar[Path | None] = ContextVar("linkstrength_toml_file", default=None)


class LinkSettings(BaseSettings):
    """Frozen settings for one linkstrength invocation.

    Attributes:
        workspace_root: Base for relative ``[graph].edge_files``; the
            directory holding ``linkstrength.toml``, else the CWD.
        config_path: The TOML file in effect, if any.
        extra_edge_files: Edge lists passed with ``--edges``, loaded last.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="LINKSTRENGTH_",
        env_nested_delimiter="__",
    )

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    extra_edge_files: tuple[Path, ...] = ()

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    graph: GraphConfig = Field(default_factory=GraphConfig)
    predict: PredictConfig = Field(default_factory=PredictConfig)
    walks: WalksConfig = Field(default_factory=WalksConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = _toml_file.get()
        if toml_file is None:
            return init_settings, env_settings
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> LinkSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist means "no config file".
        Without one, ``linkstrength.toml`` is looked up from *workspace_root*
        (or the CWD) upwards.

        Raises:
            click.ClickException: If the config file is not valid TOML.
        """
        if config_path:
            candidate = Path(config_path)
            toml_file = candidate if candidate.is_file() else None
        else:
            toml_file = find_config(workspace_root)

        if workspace_root is None:
            workspace_root = toml_file.parent if toml_file else Path.cwd()

        token = _toml_file.set(toml_file)
        try:
            return cls(workspace_root=workspace_root, config_path=toml_file, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_file}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)
