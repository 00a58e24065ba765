"""
Workspace service: one private temp directory per execution.

The manager only persists and discards bytes; it never looks at the mapping
or source content it writes.
"""

import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path

from ...core.di import resolve_or_default
from ...core.exceptions import FilesystemError
from ...core.interfaces.logger import ILogger
from ...core.models.execution import SERIALIZATION_FORMATS, Workspace

WORKSPACE_PREFIX = "run_"


class WorkspaceManager:
    """
    Creates and removes per-execution workspaces under a fixed root.

    Directory names come from ``tempfile.mkdtemp``, which picks a random name
    and creates it atomically, so concurrent executions never share one.
    """

    def __init__(self, root: Path | str, logger: ILogger | None = None) -> None:
        """
        Initialize workspace manager.

        Args:
            root: Directory under which workspaces are created
            logger: Logger for internal diagnostics
        """
        self._root = Path(root)
        self._logger = logger

    @property
    def root(self) -> Path:
        return self._root

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def create(
        self,
        mapping_text: str,
        sources: Mapping[str, str],
        serialization: str,
        mapping_extension: str = "ttl",
    ) -> Workspace:
        """
        Create a workspace and write the mapping and sources into it.

        Args:
            mapping_text: Serialized mapping document
            sources: Logical source name -> raw content
            serialization: Engine serialization, decides output file names
            mapping_extension: Extension of the mapping file

        Returns:
            Workspace describing every file path of the execution

        Raises:
            FilesystemError: If the root or workspace cannot be created or written
        """
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=self._root)).resolve()
        except OSError as e:
            raise FilesystemError(
                "Could not create workspace directory", path=str(self._root), cause=e
            ) from e

        self.logger.debug("Created workspace: %s", path)
        extension = SERIALIZATION_FORMATS[serialization].extension
        workspace = Workspace(
            path=path,
            mapping_path=path / f"mapping.{mapping_extension}",
            output_path=path / f"output.{extension}",
            metadata_path=path / f"metadata.{extension}",
            source_paths={name: path.joinpath(*name.split("/")) for name in sources},
        )

        try:
            workspace.mapping_path.write_text(mapping_text, encoding="utf-8")
            for name, content in sources.items():
                source_path = workspace.source_paths[name]
                source_path.parent.mkdir(parents=True, exist_ok=True)
                source_path.write_text(content, encoding="utf-8")
                self.logger.debug("Wrote source %s (%d chars)", name, len(content))
        except OSError as e:
            self.destroy(workspace)
            raise FilesystemError(
                "Could not write workspace files", path=str(path), cause=e
            ) from e

        return workspace

    def destroy(self, workspace: Workspace) -> None:
        """
        Recursively remove a workspace. Safe to call more than once.

        Removal failures are logged, not raised.
        """
        try:
            shutil.rmtree(workspace.path)
            self.logger.debug("Removed workspace: %s", workspace.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning("Failed to remove workspace %s: %s", workspace.path, e)
