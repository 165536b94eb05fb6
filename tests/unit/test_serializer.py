"""Unit tests for the toolchain document serializer."""

import json
from pathlib import Path

import pytest

from vsconfig.config import ExtractionConfig
from vsconfig.model import CompilerInfo, ToolchainFamily, ToolchainIdentity, ToolchainRecord
from vsconfig.serializer import ConfigWriteError, render, to_document, write_config


def _record(name="linuxx86-64", arch="x86-64"):
    return ToolchainRecord(
        identity=ToolchainIdentity(arch, "linux", "release", "release"),
        name=name,
        compiler=CompilerInfo(family=ToolchainFamily.GCC, c_path="gcc", cpp_path="g++"),
    )


class TestRender:
    """Tests for render()."""

    def test_top_level_array_in_order(self):
        document = json.loads(render([_record("b", "arm64"), _record("a")]))
        assert [t["name"] for t in document] == ["b", "a"]

    def test_compact_by_default(self):
        text = render([_record()])
        assert "\n" not in text
        assert ": " not in text

    def test_pretty_printing(self):
        text = render([_record()], pretty_printing=True)
        assert text.startswith("[\n  {")
        assert json.loads(text) == to_document([_record()])

    def test_empty(self):
        assert render([]) == "[]"


class TestWriteConfig:
    """Tests for write_config()."""

    def test_creates_parent_directory(self, tmp_path):
        config = ExtractionConfig(config_file=tmp_path / "build" / "nested" / "vscodeconfig.json")
        path = write_config([_record()], config)
        assert path.is_file()
        assert json.loads(path.read_text(encoding="utf-8"))[0]["cPath"] == "gcc"

    def test_overwrites_existing(self, tmp_path):
        target = tmp_path / "vscodeconfig.json"
        target.write_text("stale", encoding="utf-8")
        write_config([], ExtractionConfig(config_file=target))
        assert target.read_text(encoding="utf-8") == "[]"

    def test_failure_surfaces_path(self, tmp_path):
        """A write failure raises ConfigWriteError naming the path."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        target = blocker / "vscodeconfig.json"

        with pytest.raises(ConfigWriteError) as exc_info:
            write_config([_record()], ExtractionConfig(config_file=target))

        assert exc_info.value.path == target
        assert isinstance(exc_info.value.cause, OSError)
        assert str(target) in str(exc_info.value)

    def test_returns_configured_path(self, tmp_path):
        config = ExtractionConfig(config_file=tmp_path / "out.json")
        assert write_config([], config) == Path(tmp_path / "out.json")
