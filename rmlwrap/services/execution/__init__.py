"""Execution services: workspace, command, process, output and the wrapper facade."""

from .collector import OutputCollector
from .command import DEFAULT_VM_OPTIONS, CommandBuilder, format_vm_option, merge_vm_options
from .markers import FAILURE_MARKERS, FailureKind, classify_log, classify_outcome
from .runner import ProcessRunner
from .workspace import WorkspaceManager
from .wrapper import RMLMapperWrapper

__all__ = [
    "DEFAULT_VM_OPTIONS",
    "FAILURE_MARKERS",
    "CommandBuilder",
    "FailureKind",
    "OutputCollector",
    "ProcessRunner",
    "RMLMapperWrapper",
    "WorkspaceManager",
    "classify_log",
    "classify_outcome",
    "format_vm_option",
    "merge_vm_options",
]
