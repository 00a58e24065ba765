"""
Command builder for RMLMapper invocations.

Pure data transformation: workspace + options in, CommandSpec out.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from ...core.models.execution import CommandSpec, ExecutionOptions, Workspace

# JVM properties every invocation gets unless overridden.
DEFAULT_VM_OPTIONS: dict[str, str] = {}

# RMLMapper CLI flags
MAPPING_FLAG = "-m"
OUTPUT_FLAG = "-o"
SERIALIZATION_FLAG = "-s"
METADATA_FILE_FLAG = "-e"
METADATA_LEVEL_FLAG = "-l"


def merge_vm_options(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge option layers left to right; later layers win on key collision."""
    merged: dict[str, str] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def format_vm_option(key: str, value: str) -> str:
    """
    Render one JVM property flag.

    ``file.encoding`` and ``Dfile.encoding`` both become
    ``-Dfile.encoding=<value>``; keys already starting with ``-`` are kept.
    Only ``D`` followed by a lowercase letter counts as a prefix, so a
    property such as ``DEBUG_LEVEL`` renders as ``-DDEBUG_LEVEL``.
    """
    if key.startswith("-"):
        return f"{key}={value}"
    if len(key) > 1 and key[0] == "D" and key[1].islower():
        return f"-{key}={value}"
    return f"-D{key}={value}"


def _pin_executable(executable: str) -> str:
    """Bare names stay as they are for PATH lookup; paths become absolute."""
    if os.sep in executable or (os.altsep and os.altsep in executable):
        return str(Path(executable).expanduser().absolute())
    return executable


class CommandBuilder:
    """Assembles ``java [-D...] -jar <engine> -m ... -o ...`` argument lists."""

    def __init__(
        self,
        engine_path: Path | str,
        java_path: str = "java",
        default_vm_options: Mapping[str, str] | None = None,
    ) -> None:
        # The child runs with the workspace as cwd, so relative paths are pinned here
        self._engine_path = Path(engine_path).expanduser().absolute()
        self._java_path = _pin_executable(java_path)
        self._default_vm_options = dict(default_vm_options or {})

    @property
    def engine_path(self) -> Path:
        return self._engine_path

    def vm_flags(self, options: ExecutionOptions) -> list[str]:
        merged = merge_vm_options(DEFAULT_VM_OPTIONS, self._default_vm_options, options.vm_options)
        return [format_vm_option(key, value) for key, value in merged.items()]

    def build(self, workspace: Workspace, options: ExecutionOptions) -> CommandSpec:
        """
        Build the engine command for one execution.

        Args:
            workspace: Workspace holding the mapping and receiving outputs
            options: Validated execution options

        Returns:
            CommandSpec running in the workspace directory
        """
        args = [
            *self.vm_flags(options),
            "-jar",
            str(self._engine_path),
            MAPPING_FLAG,
            str(workspace.mapping_path),
            OUTPUT_FLAG,
            str(workspace.output_path),
        ]

        # Omitted flag means the engine default, DEFAULT_SERIALIZATION
        if options.serialization:
            args += [SERIALIZATION_FLAG, options.serialization]

        if options.generate_metadata:
            args += [
                METADATA_FILE_FLAG,
                str(workspace.metadata_path),
                METADATA_LEVEL_FLAG,
                options.metadata_detail_level,
            ]

        return CommandSpec(executable=self._java_path, args=tuple(args), cwd=workspace.path)
