"""
Shared pytest fixtures for rmlwrap tests.

This module provides:
- fake_java: an executable standing in for `java`, running tests/fake_rmlmapper.py
- engine_jar: a placeholder rmlmapper.jar the fake engine checks for
- wrapper: an RMLMapperWrapper wired to the fake engine
- read_case: loads mapping/source/expected files from tests/data
"""

import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from rmlwrap import RMLMapperWrapper
from rmlwrap.core.bootstrap import reset as reset_bootstrap

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
FAKE_ENGINE = TESTS_DIR / "fake_rmlmapper.py"


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: runs the wrapper against the fake engine")
    config.addinivalue_line(
        "markers", "live_rmlmapper: needs a real rmlmapper.jar (set RMLMAPPER_JAR)"
    )


@pytest.fixture(autouse=True)
def reset_container():
    """Keep bootstrap() registrations from leaking between tests."""
    yield
    reset_bootstrap()


@pytest.fixture(scope="session")
def fake_java(tmp_path_factory) -> str:
    """
    Create an executable `java` that runs the fake engine.

    Returns:
        Absolute path of the executable
    """
    if os.name == "nt":
        pytest.skip("fake java launcher is a POSIX shell script")

    bin_dir = tmp_path_factory.mktemp("fake-bin")
    launcher = bin_dir / "java"
    launcher.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{FAKE_ENGINE}" "$@"\n')
    launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(launcher)


@pytest.fixture
def engine_jar(tmp_path: Path) -> Path:
    """Placeholder engine jar; the fake engine only checks that it exists."""
    jar = tmp_path / "engine" / "rmlmapper.jar"
    jar.parent.mkdir()
    jar.write_bytes(b"PK\x03\x04")
    return jar


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    return tmp_path / "workspaces"


@pytest.fixture
def wrapper(fake_java: str, engine_jar: Path, temp_root: Path) -> RMLMapperWrapper:
    return RMLMapperWrapper(engine_jar, temp_root, True, java_path=fake_java)


@pytest.fixture
def read_case() -> Callable[[str, str], str]:
    """Read a file from tests/data/<case>/<name>."""

    def _read(case: str, name: str) -> str:
        return (DATA_DIR / case / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture
def list_workspaces() -> Callable[[Path], list[Path]]:
    """List workspace directories left under a temp root."""

    def _list(root: Path) -> list[Path]:
        if not root.exists():
            return []
        return [p for p in root.iterdir() if p.is_dir()]

    return _list
