"""Setup script for rmlwrap."""

from pathlib import Path

from setuptools import find_packages, setup


def read_version():
    """Read __version__ from the package without importing it."""
    init_py = Path(__file__).parent / "rmlwrap" / "__init__.py"
    for line in init_py.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("\"'")
    raise RuntimeError("Unable to find __version__ in rmlwrap/__init__.py")


setup(
    name="rmlwrap",
    version=read_version(),
    description="Run RML mapping documents through RMLMapper from Python",
    packages=find_packages(include=["rmlwrap", "rmlwrap.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "dependency-injector>=4.41",
        "rdflib>=7.0,<7.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
