"""
Core infrastructure for rmlwrap.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for settings and logging
- Settings loading from TOML and environment
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    ConfigFileError,
    ConsistencyError,
    FilesystemError,
    InvalidOptionsError,
    MappingExecutionError,
    ParseError,
    ProcessError,
    ProcessSpawnError,
    ProcessTimeoutError,
    RMLWrapConfigError,
    RMLWrapException,
    RMLWrapValidationError,
)
from .settings import RMLWrapSettings, find_config_file, load_settings

__all__ = [
    "ConfigFileError",
    "ConsistencyError",
    "FilesystemError",
    "InvalidOptionsError",
    "MappingExecutionError",
    "ParseError",
    "ProcessError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
    "RMLWrapConfigError",
    "RMLWrapException",
    "RMLWrapSettings",
    "RMLWrapValidationError",
    "ServiceContainer",
    "bootstrap",
    "find_config_file",
    "get_container",
    "is_initialized",
    "load_settings",
    "reset",
    "resolve",
    "try_resolve",
]
