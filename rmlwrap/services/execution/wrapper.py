"""
RMLMapper execution wrapper.

The single entry point of rmlwrap: turns a mapping document plus named
sources into engine output, with one private workspace per call that is
removed on every exit path.

Usage:
    wrapper = RMLMapperWrapper("rmlmapper.jar", "./tmp")
    result = wrapper.execute(mapping_ttl, sources={"student.csv": csv_text}, as_quads=True)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ...core.di import resolve_or_default
from ...core.exceptions import (
    InvalidOptionsError,
    MappingExecutionError,
    ProcessSpawnError,
    RMLWrapValidationError,
)
from ...core.interfaces.logger import ILogger
from ...core.models.execution import ExecutionOptions, ExecutionResult
from ...core.settings import RMLWrapSettings, load_settings
from ...utils.rdf import has_named_graphs, serialize_statements
from .collector import OutputCollector
from .command import CommandBuilder
from .markers import FailureKind, classify_outcome
from .runner import ProcessRunner
from .workspace import WorkspaceManager


class RMLMapperWrapper:
    """
    Executes RML mapping documents with RMLMapper.

    Holds only construction-time configuration, so one instance can serve
    concurrent ``execute`` calls from several threads.
    """

    def __init__(
        self,
        engine_path: Path | str,
        temp_root: Path | str,
        delete_temp_after_run: bool = True,
        vm_options: Mapping[str, str] | None = None,
        *,
        java_path: str = "java",
        timeout: float | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the wrapper.

        Args:
            engine_path: Path to rmlmapper.jar
            temp_root: Directory under which per-call workspaces are created
            delete_temp_after_run: Remove workspaces after each call; turn off
                to inspect engine inputs and outputs when debugging
            vm_options: JVM properties added to every call, e.g.
                ``{"file.encoding": "UTF-8"}``
            java_path: Java executable (name on PATH or path)
            timeout: Default seconds before the engine is killed
            logger: Logger for internal diagnostics
        """
        if timeout is not None and timeout <= 0:
            raise RMLWrapValidationError("timeout must be positive", context={"timeout": timeout})

        self._engine_path = Path(engine_path).expanduser().absolute()
        self._temp_root = Path(temp_root).expanduser().absolute()
        self._delete_temp_after_run = delete_temp_after_run
        self._vm_options = dict(vm_options or {})
        self._timeout = timeout
        self._logger = logger

        self._workspaces = WorkspaceManager(self._temp_root, logger=logger)
        self._builder = CommandBuilder(self._engine_path, java_path, self._vm_options)
        self._runner = ProcessRunner(logger=logger)
        self._collector = OutputCollector(logger=logger)

    @classmethod
    def from_settings(
        cls,
        settings: RMLWrapSettings | None = None,
        logger: ILogger | None = None,
    ) -> RMLMapperWrapper:
        """
        Build a wrapper from settings.

        Args:
            settings: Settings to use; defaults to the bootstrapped settings,
                or freshly loaded ones from config file and environment

        Returns:
            Configured RMLMapperWrapper
        """
        if settings is None:
            settings = resolve_or_default(RMLWrapSettings, load_settings)
        return cls(
            settings.engine.path,
            settings.workspace.temp_root,
            delete_temp_after_run=settings.workspace.delete_after_run,
            vm_options=settings.engine.vm_options,
            java_path=settings.engine.java_path,
            timeout=settings.engine.timeout,
            logger=logger,
        )

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def engine_path(self) -> Path:
        return self._engine_path

    @property
    def temp_root(self) -> Path:
        return self._temp_root

    @property
    def delete_temp_after_run(self) -> bool:
        return self._delete_temp_after_run

    @property
    def vm_options(self) -> dict[str, str]:
        return dict(self._vm_options)

    def check_engine(self) -> bool:
        """Check whether the engine jar exists."""
        return self._engine_path.is_file()

    def execute(
        self,
        mapping: str | Iterable[Any],
        options: ExecutionOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> ExecutionResult:
        """
        Execute a mapping document.

        Args:
            mapping: Mapping document as Turtle text, or an iterable of
                triples/quads (e.g. an rdflib Graph) serialized before use
            options: ExecutionOptions or a dict of its fields
            **overrides: Option fields given directly, e.g.
                ``sources={...}, as_quads=True``

        Returns:
            ExecutionResult with output, optional metadata and the engine log

        Raises:
            InvalidOptionsError: If options fail validation
            RMLWrapValidationError: If the mapping cannot be serialized
            FilesystemError: If the workspace cannot be created
            ProcessSpawnError: If the engine cannot be started
            ProcessTimeoutError: If the engine exceeded the timeout
            MappingExecutionError: If the engine reported a rules failure
            ConsistencyError: If the engine claimed success without output
            ParseError: If ``as_quads`` output does not parse
        """
        opts = self._resolve_options(options, overrides)
        mapping_text, mapping_extension = self._prepare_mapping(mapping)

        if not self.check_engine():
            raise ProcessSpawnError(
                "Mapping engine not found",
                context={"engine_path": str(self._engine_path)},
            )

        workspace = self._workspaces.create(
            mapping_text,
            opts.sources,
            opts.effective_serialization,
            mapping_extension,
        )
        self.logger.debug("Workspace ready: %s", workspace.path)

        try:
            spec = self._builder.build(workspace, opts)
            timeout = opts.timeout if opts.timeout is not None else self._timeout
            outcome = self._runner.run(spec, timeout=timeout)

            failure = classify_outcome(outcome)
            if failure is FailureKind.ENGINE_UNAVAILABLE:
                raise ProcessSpawnError(
                    "Mapping engine could not be started",
                    command=str(spec),
                    log=outcome.log,
                )
            if failure is FailureKind.MAPPING:
                self.logger.info("Engine reported a mapping failure (exit code %d)", outcome.exit_code)
                raise MappingExecutionError(log=outcome.log, exit_code=outcome.exit_code)

            output, metadata = self._collector.collect(workspace, opts, log=outcome.log)
            self.logger.debug("Execution succeeded in %.2fs", outcome.duration)
            return ExecutionResult(output=output, metadata=metadata, log=outcome.log)
        finally:
            if self._delete_temp_after_run:
                self._workspaces.destroy(workspace)
            else:
                self.logger.info("Keeping workspace: %s", workspace.path)

    def _resolve_options(
        self,
        options: ExecutionOptions | Mapping[str, Any] | None,
        overrides: Mapping[str, Any],
    ) -> ExecutionOptions:
        """Validate options at the boundary, before touching the filesystem."""
        if isinstance(options, ExecutionOptions) and not overrides:
            return options

        if isinstance(options, ExecutionOptions):
            data = {**options.model_dump(), **overrides}
        elif options is None or isinstance(options, Mapping):
            data = {**(options or {}), **overrides}
        else:
            raise InvalidOptionsError(
                f"options must be ExecutionOptions or a mapping, got {type(options).__name__}"
            )

        try:
            return ExecutionOptions(**data)
        except ValidationError as e:
            errors = [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise InvalidOptionsError(
                "Invalid execution options", validation_errors=errors, cause=e
            ) from e

    def _prepare_mapping(self, mapping: str | Iterable[Any]) -> tuple[str, str]:
        """Return mapping text and the file extension it should be saved under."""
        if isinstance(mapping, str):
            return mapping, "ttl"
        if isinstance(mapping, (bytes, bytearray)) or not isinstance(mapping, Iterable):
            raise RMLWrapValidationError(
                "mapping must be Turtle text or an iterable of statements",
                context={"type": type(mapping).__name__},
            )

        statements = list(mapping)
        try:
            text = serialize_statements(statements)
            extension = "nq" if has_named_graphs(statements) else "ttl"
        except (TypeError, ValueError) as e:
            raise RMLWrapValidationError(
                f"Could not serialize mapping statements: {e}", cause=e
            ) from e

        self.logger.debug("Serialized %d mapping statements", len(statements))
        return text, extension
