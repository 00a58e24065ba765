"""
Execution domain models.

Options are Pydantic models validated at the boundary, before any workspace
exists. Carriers of paths, process output and rdflib terms are plain frozen
dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Annotated, Any, Literal, NamedTuple

from pydantic import Field, field_validator, model_validator

from .base import ImmutableModel

Serialization = Literal["nquads", "ntriples", "turtle", "trig", "trix", "jsonld"]
MetadataDetailLevel = Literal["dataset", "triple", "term"]


class SerializationFormat(NamedTuple):
    """File extension and rdflib parser name for one engine serialization."""

    extension: str
    rdflib_format: str


SERIALIZATION_FORMATS: dict[str, SerializationFormat] = {
    "nquads": SerializationFormat("nq", "nquads"),
    "ntriples": SerializationFormat("nt", "nt"),
    "turtle": SerializationFormat("ttl", "turtle"),
    "trig": SerializationFormat("trig", "trig"),
    "trix": SerializationFormat("trix", "trix"),
    "jsonld": SerializationFormat("jsonld", "json-ld"),
}

# What RMLMapper writes when no -s flag is given. The command builder omits
# the flag and the collector parses with this format, so both must agree.
DEFAULT_SERIALIZATION: Serialization = "nquads"

# Mapping file names a workspace may hold; which one depends on the mapping input.
MAPPING_FILE_NAMES = frozenset({"mapping.ttl", "mapping.nq"})


def workspace_file_names(serialization: str) -> frozenset[str]:
    """Top-level names the wrapper itself writes or reads in a workspace."""
    extension = SERIALIZATION_FORMATS[serialization].extension
    return MAPPING_FILE_NAMES | {f"output.{extension}", f"metadata.{extension}"}


class Statement(NamedTuple):
    """A single triple or quad; ``graph`` is None for the default graph."""

    subject: Any
    predicate: Any
    object: Any
    graph: Any = None


class ExecutionOptions(ImmutableModel):
    """Per-call options for ``RMLMapperWrapper.execute``."""

    sources: dict[str, str] = Field(default_factory=dict)
    generate_metadata: bool = False
    as_quads: bool = False
    serialization: Serialization | None = None
    metadata_detail_level: MetadataDetailLevel = "triple"
    vm_options: dict[str, str] = Field(default_factory=dict)
    timeout: Annotated[float, Field(gt=0, strict=False)] | None = None

    @field_validator("sources")
    @classmethod
    def validate_source_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Source names become relative file paths inside the workspace."""
        for name in v:
            _check_source_name(name)
        return v

    @field_validator("vm_options")
    @classmethod
    def validate_vm_option_keys(cls, v: dict[str, str]) -> dict[str, str]:
        for key in v:
            if not key.strip("-") or any(ch.isspace() for ch in key) or "=" in key:
                raise ValueError(f"Invalid VM option name: {key!r}")
        return v

    @model_validator(mode="after")
    def check_workspace_collisions(self) -> ExecutionOptions:
        """Sources may not overwrite the mapping or the engine's output files."""
        taken = workspace_file_names(self.effective_serialization)
        clashes = sorted(name for name in self.sources if name in taken)
        if clashes:
            raise ValueError(f"Source names collide with workspace files: {', '.join(clashes)}")
        return self

    @property
    def effective_serialization(self) -> str:
        return self.serialization or DEFAULT_SERIALIZATION

    @property
    def serialization_format(self) -> SerializationFormat:
        return SERIALIZATION_FORMATS[self.effective_serialization]


def _check_source_name(name: str) -> None:
    if not name or name.strip() != name:
        raise ValueError(f"Invalid source name: {name!r}")
    if "\\" in name or "\x00" in name:
        raise ValueError(f"Source name must be a relative POSIX path: {name!r}")

    path = PurePosixPath(name)
    if path.is_absolute() or any(part in ("..", ".") for part in name.split("/")):
        raise ValueError(f"Source name must stay inside the workspace: {name!r}")
    if "" in name.split("/"):
        raise ValueError(f"Source name has an empty path segment: {name!r}")


@dataclass(frozen=True)
class Workspace:
    """An exclusively owned directory holding the files of one execution."""

    path: Path
    mapping_path: Path
    output_path: Path
    metadata_path: Path
    source_paths: dict[str, Path] = field(default_factory=dict)

    def exists(self) -> bool:
        return self.path.is_dir()


@dataclass(frozen=True)
class CommandSpec:
    """A fully resolved engine invocation."""

    executable: str
    args: tuple[str, ...]
    cwd: Path

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class ProcessOutcome:
    """Captured result of one engine run.

    ``log`` holds stdout and stderr interleaved in arrival order; the
    separate streams are kept too since some callers only want stderr.
    """

    exit_code: int
    stdout: str
    stderr: str
    log: str
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ExecutionResult:
    """What a successful ``execute`` call hands back."""

    output: str | list[Statement]
    metadata: str | list[Statement] | None
    log: str
