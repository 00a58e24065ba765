"""
rmlwrap: run RML mapping documents through RMLMapper from Python.

    from rmlwrap import RMLMapperWrapper

    wrapper = RMLMapperWrapper("rmlmapper.jar", "./tmp")
    result = wrapper.execute(mapping_ttl, sources={"student.csv": csv_text})
"""

from .core.exceptions import (
    ConsistencyError,
    FilesystemError,
    InvalidOptionsError,
    MappingExecutionError,
    ParseError,
    ProcessError,
    ProcessSpawnError,
    ProcessTimeoutError,
    RMLWrapException,
    RMLWrapValidationError,
)
from .core.models.execution import (
    DEFAULT_SERIALIZATION,
    ExecutionOptions,
    ExecutionResult,
    Statement,
)
from .services.execution.wrapper import RMLMapperWrapper
from .utils.rdf import isomorphic, parse_statements

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SERIALIZATION",
    "ConsistencyError",
    "ExecutionOptions",
    "ExecutionResult",
    "FilesystemError",
    "InvalidOptionsError",
    "MappingExecutionError",
    "ParseError",
    "ProcessError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
    "RMLMapperWrapper",
    "RMLWrapException",
    "RMLWrapValidationError",
    "Statement",
    "isomorphic",
    "parse_statements",
]
