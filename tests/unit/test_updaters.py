"""Tests for manifest version updates and output files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from semrel.core.version import Version
from semrel.exceptions import ProjectError, UpdaterNotFoundError, VersionNotFoundError
from semrel.project.outputs import write_ghr_file, write_version_file
from semrel.project.updaters import (
    apply_update,
    default_updaters,
    update_package_json,
    update_pyproject_toml,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestUpdatePackageJson:
    def test_updates_version(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "app", "version": "1.0.0", "private": true}')

        update_package_json(path, "1.1.0")

        assert json.loads(path.read_text()) == {
            "name": "app",
            "version": "1.1.0",
            "private": True,
        }
        assert path.read_text().endswith("}\n")
        assert '\n  "name": "app"' in path.read_text()

    def test_adds_missing_version(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "app"}')

        update_package_json(path, "2.0.0")

        assert json.loads(path.read_text())["version"] == "2.0.0"

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{not json")

        with pytest.raises(ProjectError, match="Invalid JSON"):
            update_package_json(path, "1.0.0")


class TestUpdatePyprojectToml:
    def test_pep621(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[build-system]\nrequires = ["hatchling"]\n\n'
            '[project]\nname = "x"\n# keep me\nversion = "1.0.0"\n\n'
            '[tool.other]\nversion = "9.9.9"\n'
        )

        update_pyproject_toml(path, "1.1.0")

        content = path.read_text()
        assert 'version = "1.1.0"' in content
        assert "# keep me" in content
        assert 'version = "9.9.9"' in content

    def test_poetry(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.poetry]\nname = 'x'\nversion = '0.1.0'\n")

        update_pyproject_toml(path, "1.0.0")

        assert path.read_text() == "[tool.poetry]\nname = 'x'\nversion = \"1.0.0\"\n"

    def test_missing_version(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\ndynamic = ["version"]\n')

        with pytest.raises(VersionNotFoundError):
            update_pyproject_toml(path, "1.0.0")


class TestApplyUpdate:
    def test_dispatches_on_file_name(self, tmp_path: Path):
        calls = []
        path = tmp_path / "custom.txt"
        path.write_text("0.0.0")

        apply_update(path, "1.2.3", {"custom.txt": lambda p, v: calls.append((p, v))})

        assert calls == [(path, "1.2.3")]

    def test_default_updaters(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"version": "1.0.0"}')

        apply_update(path, "1.0.1", default_updaters())

        assert json.loads(path.read_text())["version"] == "1.0.1"

    def test_unknown_file_name(self, tmp_path: Path):
        with pytest.raises(UpdaterNotFoundError, match="package.json"):
            apply_update(tmp_path / "setup.cfg", "1.0.0", default_updaters())

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ProjectError, match="not found"):
            apply_update(tmp_path / "package.json", "1.0.0", default_updaters())

    def test_registries_are_independent(self):
        """Each call builds a fresh mapping."""
        first = default_updaters()
        first.pop("package.json")

        assert "package.json" in default_updaters()


class TestOutputs:
    def test_ghr_file(self, tmp_path: Path):
        path = write_ghr_file(tmp_path / ".ghr", "owner", "repo", Version(1, 2, 0, "beta.1"))

        assert path.read_text() == "-u owner -r repo v1.2.0-beta.1"

    def test_version_file(self, tmp_path: Path):
        path = write_version_file(tmp_path / ".version", Version(2, 0, 0))

        assert path.read_text() == "2.0.0"
