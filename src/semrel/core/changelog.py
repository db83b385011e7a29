"""Markdown changelog rendering.

The changelog of a release is built from the notes collected while
folding commits: one section per note key, in sorted key order, each
titled with the label of its commit type.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from semrel.core.commits import BREAKING_CHANGE_KEY

if TYPE_CHECKING:
    from collections.abc import Mapping

    from semrel.core.commits import Change
    from semrel.core.version import Version

TYPE_LABELS: dict[str, str] = {
    "feat": "Feature",
    "fix": "Bug Fixes",
    "perf": "Performance Improvements",
    "revert": "Reverts",
    "docs": "Documentation",
    "style": "Styles",
    "refactor": "Code Refactoring",
    "test": "Tests",
    "chore": "Chores",
    BREAKING_CHANGE_KEY: "Breaking Changes",
}


def render_changelog(
    change: Change,
    version: Version,
    *,
    today: date | None = None,
    labels: Mapping[str, str] | None = None,
) -> str:
    """Render the release notes for ``version``.

    Args:
        change: Change folded from the released commits
        version: Version being released
        today: Release date; the current UTC date when omitted
        labels: Extra section titles, merged over :data:`TYPE_LABELS`

    Returns:
        Markdown text starting with ``## <version> (<date>)``
    """
    if today is None:
        today = datetime.now(UTC).date()

    section_labels = {**TYPE_LABELS, **(labels or {})}

    changelog = f"## {version} ({today.strftime('%Y-%m-%d')})\n\n"

    # Plain key order, so breaking changes ("%%bc%%") come first only
    # because "%" sorts before letters.
    for key in sorted(change.notes):
        label = section_labels.get(key, key)
        changelog += f"#### {label}\n\n{change.notes[key]}\n"

    return changelog
