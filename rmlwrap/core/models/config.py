"""
Configuration models.

Provides Pydantic models for rmlwrap configuration sections with validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import RMLWrapBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(RMLWrapBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env types
        validate_assignment=True,
        extra="ignore",
    )


class EngineConfig(ConfigBaseModel):
    """Mapping engine configuration section."""

    path: Annotated[str, Field(min_length=1)] = "rmlmapper.jar"
    java_path: Annotated[str, Field(min_length=1)] = "java"
    vm_options: dict[str, str] = Field(default_factory=dict)
    timeout: Annotated[float, Field(gt=0)] | None = None

    @field_validator("vm_options", mode="before")
    @classmethod
    def stringify_values(cls, v: dict | None) -> dict:
        """TOML may hold numbers or booleans; the JVM only sees strings."""
        if v is None:
            return {}
        return {str(key): str(value) for key, value in v.items()}


class WorkspaceConfig(ConfigBaseModel):
    """Temporary workspace configuration section."""

    temp_root: Annotated[str, Field(min_length=1)] = "./tmp"
    delete_after_run: bool = True


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False
    file_path: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    def resolved_file_path(self) -> Path | None:
        """Expand ``~`` in the configured log file path."""
        return Path(self.file_path).expanduser() if self.file_path else None
