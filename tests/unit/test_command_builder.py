"""
Unit tests for CommandBuilder.

Tests RMLMapper argument construction and VM option merging.
"""

from pathlib import Path

import pytest

from rmlwrap.core.models.execution import ExecutionOptions, Workspace
from rmlwrap.services.execution.command import (
    CommandBuilder,
    format_vm_option,
    merge_vm_options,
)


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    return Workspace(
        path=tmp_path,
        mapping_path=tmp_path / "mapping.ttl",
        output_path=tmp_path / "output.nq",
        metadata_path=tmp_path / "metadata.nq",
    )


@pytest.fixture
def builder(tmp_path: Path) -> CommandBuilder:
    return CommandBuilder(tmp_path / "rmlmapper.jar")


class TestBuild:
    """Test argument lists for the engine CLI."""

    def test_minimal_command(self, builder, workspace, tmp_path):
        """Without options: java -jar <engine> -m <mapping> -o <output>."""
        spec = builder.build(workspace, ExecutionOptions())

        assert spec.executable == "java"
        assert spec.args == (
            "-jar",
            str(tmp_path / "rmlmapper.jar"),
            "-m",
            str(workspace.mapping_path),
            "-o",
            str(workspace.output_path),
        )
        assert spec.cwd == workspace.path

    def test_serialization_flag_only_when_given(self, builder, workspace):
        """Omitting serialization leaves the engine default in charge."""
        default = builder.build(workspace, ExecutionOptions())
        jsonld = builder.build(workspace, ExecutionOptions(serialization="jsonld"))

        assert "-s" not in default.args
        assert jsonld.args[-2:] == ("-s", "jsonld")

    def test_metadata_flags(self, builder, workspace):
        spec = builder.build(workspace, ExecutionOptions(generate_metadata=True))

        assert spec.args[-4:] == ("-e", str(workspace.metadata_path), "-l", "triple")

    def test_metadata_detail_level(self, builder, workspace):
        spec = builder.build(
            workspace,
            ExecutionOptions(generate_metadata=True, metadata_detail_level="dataset"),
        )

        assert spec.args[-2:] == ("-l", "dataset")

    def test_no_metadata_flags_by_default(self, builder, workspace):
        spec = builder.build(workspace, ExecutionOptions())

        assert "-e" not in spec.args
        assert "-l" not in spec.args

    def test_vm_flags_precede_jar(self, tmp_path, workspace):
        """JVM properties must come before -jar to reach the JVM."""
        builder = CommandBuilder(tmp_path / "rmlmapper.jar", default_vm_options={"file.encoding": "UTF-8"})

        spec = builder.build(workspace, ExecutionOptions())

        assert spec.args[0] == "-Dfile.encoding=UTF-8"
        assert spec.args[1] == "-jar"

    def test_per_call_vm_options_override_defaults(self, tmp_path, workspace):
        builder = CommandBuilder(
            tmp_path / "rmlmapper.jar",
            default_vm_options={"file.encoding": "UTF-8", "user.language": "en"},
        )

        spec = builder.build(workspace, ExecutionOptions(vm_options={"file.encoding": "ISO-8859-1"}))

        vm_flags = list(spec.args[: spec.args.index("-jar")])
        assert vm_flags == ["-Dfile.encoding=ISO-8859-1", "-Duser.language=en"]

    def test_relative_engine_path_is_pinned(self, workspace, monkeypatch, tmp_path):
        """The child runs inside the workspace, so relative paths are made absolute."""
        monkeypatch.chdir(tmp_path)
        builder = CommandBuilder("rmlmapper.jar", java_path="./bin/java")

        spec = builder.build(workspace, ExecutionOptions())

        assert spec.args[1] == str(Path.cwd() / "rmlmapper.jar")
        assert spec.executable == str(Path.cwd() / "bin" / "java")

    def test_bare_java_name_stays_on_path(self, builder, workspace):
        assert builder.build(workspace, ExecutionOptions()).executable == "java"

    def test_build_is_pure(self, builder, workspace):
        """Same input, same command; nothing is written."""
        options = ExecutionOptions(serialization="turtle", generate_metadata=True)

        assert builder.build(workspace, options) == builder.build(workspace, options)
        assert not workspace.output_path.exists()


class TestVMOptionHelpers:
    """Test merging and rendering of JVM property flags."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("file.encoding", "-Dfile.encoding=UTF-8"),
            ("Dfile.encoding", "-Dfile.encoding=UTF-8"),
            ("-Dfile.encoding", "-Dfile.encoding=UTF-8"),
            ("DEBUG_LEVEL", "-DDEBUG_LEVEL=UTF-8"),
            ("D", "-DD=UTF-8"),
            ("Dfoo", "-Dfoo=UTF-8"),
        ],
    )
    def test_format_vm_option(self, key, expected):
        assert format_vm_option(key, "UTF-8") == expected

    def test_merge_later_layers_win(self):
        merged = merge_vm_options({"a": "1", "b": "1"}, None, {"b": "2"}, {"c": "3"})

        assert merged == {"a": "1", "b": "2", "c": "3"}

    def test_merge_keeps_first_insertion_order(self):
        merged = merge_vm_options({"a": "1", "b": "1"}, {"a": "2"})

        assert list(merged) == ["a", "b"]
