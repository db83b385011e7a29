"""Project file handling."""

from __future__ import annotations

from semrel.project.outputs import write_ghr_file, write_version_file
from semrel.project.updaters import Updater, apply_update, default_updaters

__all__ = [
    "Updater",
    "apply_update",
    "default_updaters",
    "write_ghr_file",
    "write_version_file",
]
