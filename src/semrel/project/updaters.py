"""Version updates in project manifest files.

Which handler updates a file is decided by its file name, through an
explicit ``{file name: updater}`` mapping built with
:func:`default_updaters` and passed to :func:`apply_update`.

The pyproject.toml handler preserves formatting and comments by using
regex-based replacement rather than full TOML parsing and rewriting.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from pathlib import Path

from semrel.exceptions import ProjectError, UpdaterNotFoundError, VersionNotFoundError

Updater = Callable[[Path, str], None]


def update_package_json(path: Path, new_version: str) -> None:
    """Set the ``version`` key of a package.json file."""
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ProjectError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ProjectError(f"Expected a JSON object in {path}")

    data["version"] = new_version
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def _replace_section_version(content: str, section_pattern: str, new_version: str) -> str | None:
    """Replace ``version = "..."`` inside the first section matching the pattern.

    Returns:
        The updated content, or None if the section has no version
    """
    replaced = False

    def replace(match: re.Match[str]) -> str:
        nonlocal replaced
        section, count = re.subn(
            r'^(version\s*=\s*)["\'][^"\']+["\']',
            rf'\g<1>"{new_version}"',
            match.group(0),
            count=1,
            flags=re.MULTILINE,
        )
        replaced = count > 0
        return section

    # Match the entire section up to the next table header or EOF
    new_content = re.sub(
        section_pattern + r".*?(?=^\[|\Z)",
        replace,
        content,
        count=1,
        flags=re.MULTILINE | re.DOTALL,
    )
    return new_content if replaced else None


def update_pyproject_toml(path: Path, new_version: str) -> None:
    """Set the version in a pyproject.toml file.

    Tries ``[project].version`` (PEP 621) first, then
    ``[tool.poetry].version``.

    Raises:
        VersionNotFoundError: If neither section declares a version
    """
    content = path.read_text()

    for section_pattern in (r"^\[project\]", r"^\[tool\.poetry\]"):
        new_content = _replace_section_version(content, section_pattern, new_version)
        if new_content is not None:
            path.write_text(new_content)
            return

    raise VersionNotFoundError(
        f"Could not find version to update in {path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def default_updaters() -> dict[str, Updater]:
    """Build the file name to updater mapping for a run."""
    return {
        "package.json": update_package_json,
        "pyproject.toml": update_pyproject_toml,
    }


def apply_update(path: Path, new_version: str, updaters: Mapping[str, Updater]) -> None:
    """Write ``new_version`` into the manifest at ``path``.

    Args:
        path: Manifest file to update
        new_version: Version string to write
        updaters: Handlers keyed by file name

    Raises:
        UpdaterNotFoundError: If no handler exists for the file name
        ProjectError: If the file does not exist or cannot be updated
    """
    updater = updaters.get(path.name)
    if updater is None:
        supported = ", ".join(sorted(updaters)) or "none"
        raise UpdaterNotFoundError(
            f"No version updater for {path.name!r} (supported: {supported})"
        )

    if not path.is_file():
        raise ProjectError(f"File to update not found: {path}")

    updater(path, new_version)
