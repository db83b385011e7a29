"""Core business logic for semrel.

This package contains the decision logic of a release and performs no I/O:
- Semantic version parsing and bumping
- Conventional commit classification and change aggregation
- History scanning back to the last release tag
- Next version and pre-release calculation
- Changelog rendering
"""

from __future__ import annotations

from semrel.core.changelog import TYPE_LABELS, render_changelog
from semrel.core.commits import (
    BREAKING_CHANGE_KEY,
    Change,
    Commit,
    RawCommit,
    classify,
    fold,
    fold_all,
    format_commit,
    parse_commit,
    trim_sha,
)
from semrel.core.history import (
    BaselineStatus,
    CommitSource,
    HistoryScan,
    Tag,
    parse_tag_refs,
    scan_history,
)
from semrel.core.release import (
    ReleaseContext,
    calculate_prerelease,
    get_new_version,
    resolve_baseline,
)
from semrel.core.version import BumpType, Version, parse_version

__all__ = [
    # Commits
    "BREAKING_CHANGE_KEY",
    # History
    "BaselineStatus",
    # Version
    "BumpType",
    "Change",
    "Commit",
    "CommitSource",
    "HistoryScan",
    "RawCommit",
    # Release
    "ReleaseContext",
    # Changelog
    "TYPE_LABELS",
    "Tag",
    "Version",
    "calculate_prerelease",
    "classify",
    "fold",
    "fold_all",
    "format_commit",
    "get_new_version",
    "parse_commit",
    "parse_tag_refs",
    "parse_version",
    "render_changelog",
    "resolve_baseline",
    "scan_history",
    "trim_sha",
]
