"""Integration test fixtures for running the wrapper against the fake engine."""

from collections.abc import Callable

import pytest


@pytest.fixture
def tc01(read_case) -> tuple[str, dict[str, str]]:
    """Mapping and sources of the single-student case."""
    return read_case("tc01", "mapping.ttl"), {"student.csv": read_case("tc01", "student.csv")}


@pytest.fixture
def with_directives() -> Callable[..., str]:
    """Append ``# fake:<directive>`` lines to a mapping document."""

    def _add(mapping: str, *directives: str) -> str:
        return mapping + "".join(f"\n# fake:{d}" for d in directives) + "\n"

    return _add
