"""
Engine failure signatures.

RMLMapper reports many distinct problems with the same generic exit code,
and some with exit code 0, so the captured log text is the real signal.
All known signatures live in FAILURE_MARKERS.
"""

from enum import Enum
from typing import NamedTuple

from ...core.models.execution import ProcessOutcome


class FailureKind(Enum):
    """How a finished engine run failed."""

    MAPPING = "mapping"
    ENGINE_UNAVAILABLE = "engine_unavailable"


class FailureMarker(NamedTuple):
    substring: str
    kind: FailureKind


# Checked in order; the first substring found in the log decides the kind.
FAILURE_MARKERS: tuple[FailureMarker, ...] = (
    # The JVM started but could not open the engine jar
    FailureMarker("Unable to access jarfile", FailureKind.ENGINE_UNAVAILABLE),
    FailureMarker("Invalid or corrupt jarfile", FailureKind.ENGINE_UNAVAILABLE),
    # Mapping document has no usable rules
    FailureMarker("No Triples Maps found.", FailureKind.MAPPING),
    # Uncaught exception inside the engine
    FailureMarker('Exception in thread "main"', FailureKind.MAPPING),
)


def classify_log(log: str) -> FailureKind | None:
    """Return the failure kind of the first marker present in ``log``."""
    for marker in FAILURE_MARKERS:
        if marker.substring in log:
            return marker.kind
    return None


def classify_outcome(outcome: ProcessOutcome) -> FailureKind | None:
    """
    Classify a finished engine run.

    Returns:
        None for success, otherwise the failure kind. A non-zero exit code
        without a known marker counts as a mapping failure.
    """
    kind = classify_log(outcome.log)
    if kind is not None:
        return kind
    if outcome.exit_code != 0:
        return FailureKind.MAPPING
    return None
