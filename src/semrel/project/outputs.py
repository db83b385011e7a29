"""Side-channel files written after a release."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from semrel.core.version import Version

GHR_FILE = ".ghr"
VERSION_FILE = ".version"


def write_ghr_file(path: Path, owner: str, repo: str, version: Version) -> Path:
    """Write the argument file for the ghr upload tool."""
    path.write_text(f"-u {owner} -r {repo} v{version}")
    return path


def write_version_file(path: Path, version: Version) -> Path:
    path.write_text(str(version))
    return path
