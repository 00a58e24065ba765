"""
Pydantic models and data carriers for rmlwrap.

All option and configuration models use Pydantic v2 validation.
"""

from .base import ImmutableModel, RMLWrapBaseModel
from .config import EngineConfig, LoggingConfig, WorkspaceConfig
from .execution import (
    DEFAULT_SERIALIZATION,
    SERIALIZATION_FORMATS,
    CommandSpec,
    ExecutionOptions,
    ExecutionResult,
    ProcessOutcome,
    Serialization,
    SerializationFormat,
    Statement,
    Workspace,
)

__all__ = [
    "DEFAULT_SERIALIZATION",
    "SERIALIZATION_FORMATS",
    "CommandSpec",
    "EngineConfig",
    "ExecutionOptions",
    "ExecutionResult",
    "ImmutableModel",
    "LoggingConfig",
    "ProcessOutcome",
    "RMLWrapBaseModel",
    "Serialization",
    "SerializationFormat",
    "Statement",
    "Workspace",
    "WorkspaceConfig",
]
