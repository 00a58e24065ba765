"""
Output collector: turns engine output files into result values.
"""

from pathlib import Path

from ...core.di import resolve_or_default
from ...core.exceptions import ConsistencyError, ParseError
from ...core.interfaces.logger import ILogger
from ...core.models.execution import ExecutionOptions, Statement, Workspace
from ...utils.rdf import parse_statements


class OutputCollector:
    """
    Reads the output (and metadata) files of a successful run.

    Returns raw text, or parsed statements when ``as_quads`` is set. A parse
    failure is an error, never a silent fallback to text.
    """

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def collect(
        self,
        workspace: Workspace,
        options: ExecutionOptions,
        log: str | None = None,
    ) -> tuple[str | list[Statement], str | list[Statement] | None]:
        """
        Collect output and metadata.

        Args:
            workspace: Workspace of the finished run
            options: Options the run was started with
            log: Engine log, attached to any error raised here

        Returns:
            Tuple of (output, metadata); metadata is None unless requested

        Raises:
            ConsistencyError: If an expected file is missing
            ParseError: If ``as_quads`` is set and the text does not parse
        """
        output = self._read(workspace.output_path, "output", options, log)

        metadata = None
        if options.generate_metadata:
            metadata = self._read(workspace.metadata_path, "metadata", options, log)

        return output, metadata

    def _read(
        self,
        path: Path,
        label: str,
        options: ExecutionOptions,
        log: str | None,
    ) -> str | list[Statement]:
        if not path.is_file():
            self.logger.error("Engine reported success but wrote no %s file: %s", label, path)
            raise ConsistencyError(
                f"Engine did not produce the expected {label} file",
                path=str(path),
                log=log,
            )

        text = path.read_text(encoding="utf-8")
        self.logger.debug("Read %s file %s (%d chars)", label, path.name, len(text))
        if not options.as_quads:
            return text

        serialization = options.effective_serialization
        try:
            statements = parse_statements(text, serialization)
        except Exception as e:
            # rdflib raises a different exception type per parser plugin
            raise ParseError(
                f"Could not parse engine {label}: {e}",
                format=serialization,
                log=log,
                cause=e,
            ) from e

        self.logger.debug("Parsed %d statements from %s", len(statements), label)
        return statements
