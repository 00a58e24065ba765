"""
Pydantic Settings for rmlwrap configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .exceptions import ConfigFileError
from .models.config import EngineConfig, LoggingConfig, WorkspaceConfig

CONFIG_DIR_NAME = ".rmlwrap"
CONFIG_FILE_NAME = "config.toml"


def _get_logger():
    from ..services.logging import NullLogger
    from .di import resolve_or_default
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .rmlwrap/config.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.rmlwrap] table also counts.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and "rmlwrap" in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.config_file: str | None = None
        self.config_error: str | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is not None and not path.exists():
            raise ConfigFileError("Config file not found", file_path=str(path))
        if path is None:
            path = find_config_file(self._start_dir)
        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("rmlwrap", {})

            self._data = data
            self.config_file = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self.config_error = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self.config_error = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class RMLWrapSettings(BaseSettings):
    """rmlwrap settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (RMLWRAP_<section>__<field>)
    3. TOML config file (.rmlwrap/config.toml or pyproject.toml [tool.rmlwrap])
    4. Model defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="RMLWRAP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _config_file: str | None = PrivateAttr(default=None)
    _config_error: str | None = PrivateAttr(default=None)

    @property
    def config_file(self) -> str | None:
        """Path of the TOML file the settings came from, if any."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Why the TOML file was ignored, if it was unreadable."""
        return self._config_error

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source below environment variables.

        Note: pydantic-settings gives us no way to pass config_path/start_dir
        here, so load_settings() hands them over via module-level variables.
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain nested dict."""
        result: dict[str, Any] = {
            "engine": self.engine.model_dump(),
            "workspace": self.workspace.model_dump(),
            "logging": self.logging.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> RMLWrapSettings:
    """Load rmlwrap settings from config file and environment.

    Args:
        config_path: Explicit path to config file (must exist)
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit section values, highest priority

    Returns:
        RMLWrapSettings instance with all sources merged

    Raises:
        ConfigFileError: If config_path is given but does not exist
    """
    global _current_config_path, _current_start_dir

    _current_config_path = Path(config_path) if config_path else None
    _current_start_dir = start_dir

    try:
        settings = RMLWrapSettings(**overrides)

        toml_source = TomlConfigSource(RMLWrapSettings, _current_config_path, start_dir)
        toml_source()
        settings._config_file = toml_source.config_file
        settings._config_error = toml_source.config_error

        return settings
    finally:
        _current_config_path = None
        _current_start_dir = None
