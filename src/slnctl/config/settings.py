"""SlnSettings: one frozen object merging flags, environment, and slnctl.toml.

Sources, strongest first:

1. keyword arguments (the global CLI flags)
2. ``SLNCTL_*`` environment variables, ``__`` for nested keys
3. the ``slnctl.toml`` found by :func:`slnctl.config.discovery.find_config`
4. defaults baked into :mod:`slnctl.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from slnctl.config.discovery import find_config
from slnctl.config.models import MembershipConfig, SolutionConfig

# TOML file for the settings object currently being built.
_active_toml: ContextVar[Path | None] = ContextVar("slnctl_active_toml", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse a config file, reporting syntax errors as a Click error."""
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``slnctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self.path = path
        self.data: dict[str, Any] = read_toml(path) if path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.data.get(field_name), field_name, field_name in self.data

    def __call__(self) -> dict[str, Any]:
        return dict(self.data)


class SlnSettings(BaseSettings):
    """Resolved configuration for one slnctl invocation.

    Attributes:
        config_path: The TOML file that was applied, if any.
        solution: ``[solution]`` table.
        membership: ``[membership]`` table.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SLNCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    solution: SolutionConfig = Field(default_factory=SolutionConfig)
    membership: MembershipConfig = Field(default_factory=MembershipConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Flags, then environment, then the TOML file. No dotenv or secrets."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> SlnSettings:
        """Build settings for a CLI run.

        An explicit *config_path* must exist. Without one, ``slnctl.toml`` is
        looked up from *start* (default: the working directory) upwards.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file {config_path} does not exist"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(start)

        token = _active_toml.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)
