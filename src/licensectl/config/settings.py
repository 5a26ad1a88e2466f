"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LICENSECTL_*`` prefix
  3. TOML file    — ``licensectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Nothing downstream reads the process working directory: ``root`` is
resolved once here and passed explicitly to every service.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from licensectl.config.discovery import find_config
from licensectl.config.models import ManifestConfig, PreflightConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``licensectl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LicenseSettings(BaseSettings):
    """Unified settings for the licensectl CLI.

    Attributes:
        root: Working directory every relative path resolves against
            (parent of ``licensectl.toml``, or CWD if no config found).
        config_path: The TOML file actually loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LICENSECTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    preflight: PreflightConfig = Field(default_factory=PreflightConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> LicenseSettings:
        """Construct settings from CLI invocation.

        Discovers ``licensectl.toml`` via walk-up from *root* (or uses the
        explicit *config_path*), resolves *root* from the config file's
        parent directory, and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root.resolve(),
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def destination_path(self, override: str | Path | None = None) -> Path:
        """Absolute manifest destination (CLI argument wins over config)."""
        target = Path(override if override is not None else self.manifest.destination)
        target = target.expanduser()
        return target if target.is_absolute() else self.root / target
