"""
Custom exception hierarchy for rmlwrap.

Every failed ``execute`` call surfaces exactly one of these exceptions. Each
carries a short, stable ``message`` and, when the engine ran, the full
captured process ``log`` for diagnosis.
"""

from __future__ import annotations

MAPPING_ERROR_MESSAGE = "Error while executing the rules."


class RMLWrapException(Exception):
    """
    Base exception for all rmlwrap errors.

    Attributes:
        message: Human-readable error classification
        log: Captured engine output, when available
        context: Additional debugging context (paths, exit codes, etc.)
        exit_code: Suggested exit code for callers wrapping rmlwrap in a CLI
        recoverable: Whether the caller may recover (e.g. by fixing input)
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        log: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.log = log
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class RMLWrapConfigError(RMLWrapException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(RMLWrapConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, file not found, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class RMLWrapValidationError(RMLWrapException, ValueError):
    """
    Base class for input validation errors.

    Inherits from ValueError so callers can catch plain ValueError.
    """

    pass


class InvalidOptionsError(RMLWrapValidationError):
    """
    Execution options failed validation.

    Raised before any workspace is created.
    """

    def __init__(
        self,
        message: str,
        *,
        validation_errors: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if validation_errors:
            ctx["validation_errors"] = validation_errors
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Filesystem Errors
# =============================================================================


class FilesystemError(RMLWrapException):
    """
    The workspace could not be created or written.

    Fatal: the temp root is missing, read-only, or out of space.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Process Errors
# =============================================================================


class ProcessError(RMLWrapException):
    """Base class for errors spawning or supervising the engine process."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        log: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        super().__init__(message, log=log, context=ctx, cause=cause)


class ProcessSpawnError(ProcessError):
    """
    The engine executable is missing or could not be invoked.

    Covers a missing ``java`` binary, a missing engine jar, and a jar the
    JVM refuses to open.
    """

    recoverable: bool = False


class ProcessTimeoutError(ProcessError):
    """
    The engine did not finish within the configured timeout.

    The child process has been killed; ``log`` holds whatever it wrote.
    """

    def __init__(
        self,
        message: str,
        *,
        timeout: float | None = None,
        command: str | None = None,
        log: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if timeout is not None:
            ctx["timeout"] = timeout
        super().__init__(message, command=command, log=log, context=ctx, cause=cause)


# =============================================================================
# Execution Errors
# =============================================================================


class MappingExecutionError(RMLWrapException):
    """
    The engine ran but reported a rules-level failure.

    Raised for a non-zero exit code or a known failure marker in the log.
    The message is always ``"Error while executing the rules."``; look at
    ``log`` for the engine's own explanation.
    """

    def __init__(
        self,
        message: str = MAPPING_ERROR_MESSAGE,
        *,
        log: str | None = None,
        exit_code: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        super().__init__(message, log=log, context=ctx, cause=cause)


class ConsistencyError(RMLWrapException):
    """
    The engine reported success but an expected output file is missing.

    Indicates a contract mismatch between the wrapper and the engine.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        log: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, log=log, context=ctx, cause=cause)


class ParseError(RMLWrapException):
    """
    Output or metadata text could not be parsed into statements.

    The parser's own exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        format: str | None = None,
        log: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if format:
            ctx["format"] = format
        super().__init__(message, log=log, context=ctx, cause=cause)
