"""Conventional commit classification and change aggregation.

Commits are classified against the Conventional Commits subject format
``type(scope): message`` and folded one by one into a single
:class:`Change` describing the required version bump and the release
notes grouped by commit type.

See: https://www.conventionalcommits.org/
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from semrel.core.version import BumpType

logger = logging.getLogger(__name__)

# type(scope): message
COMMIT_PATTERN = re.compile(r"^(\w+)(?:\((.*)\))?: (.*)$")

# Matches both "BREAKING CHANGE" and "BREAKING CHANGES" anywhere in the message
BREAKING_PATTERN = re.compile(r"BREAKING CHANGES?")

# Note key collecting breaking changes; sorts before every letter
BREAKING_CHANGE_KEY = "%%bc%%"


@dataclass
class Change:
    """Accumulated bump flags and release notes.

    The flags only ever go from False to True while folding.
    """

    major: bool = False
    minor: bool = False
    patch: bool = False
    notes: dict[str, str] = field(default_factory=dict)

    @property
    def bump(self) -> BumpType:
        if self.major:
            return BumpType.MAJOR
        if self.minor:
            return BumpType.MINOR
        if self.patch:
            return BumpType.PATCH
        return BumpType.NONE


@dataclass(frozen=True)
class RawCommit:
    """A commit as delivered by repository access."""

    sha: str
    message: str


@dataclass(frozen=True)
class Commit:
    """A classified commit.

    ``type``, ``scope`` and ``message`` are empty strings when the subject
    is not a conventional commit; ``raw`` always keeps the original lines.
    """

    sha: str
    raw: tuple[str, ...]
    type: str = ""
    scope: str = ""
    message: str = ""
    change: Change = field(default_factory=Change)

    @property
    def subject(self) -> str:
        return self.raw[0] if self.raw else ""

    @property
    def body(self) -> str:
        return "\n".join(self.raw[1:])

    @property
    def is_conventional(self) -> bool:
        return bool(self.type)

    @property
    def is_breaking(self) -> bool:
        return self.change.major


def classify(raw_lines: Sequence[str], sha: str = "") -> Commit:
    """Classify one commit message.

    Args:
        raw_lines: Message lines; the first one is the subject
        sha: Commit identifier

    Returns:
        Classified commit. Non-conventional subjects yield a commit with
        empty type, scope and message that contributes no bump.
    """
    raw = tuple(raw_lines) or ("",)
    logger.debug("Examining: %s %s", sha, raw[0])

    match = COMMIT_PATTERN.match(raw[0])
    if match is None:
        return Commit(sha=sha, raw=raw)

    commit_type = match.group(1).lower()
    full_message = "\n".join(raw)

    return Commit(
        sha=sha,
        raw=raw,
        type=commit_type,
        scope=match.group(2) or "",
        message=match.group(3),
        change=Change(
            major=BREAKING_PATTERN.search(full_message) is not None,
            minor=commit_type == "feat",
            patch=commit_type == "fix",
        ),
    )


def parse_commit(commit: RawCommit) -> Commit:
    """Classify a commit record from repository access."""
    return classify(commit.message.split("\n"), commit.sha)


def trim_sha(sha: str) -> str:
    """Shorten a commit id to 8 characters for display."""
    if len(sha) < 9:
        return sha
    return sha[:8]


def format_commit(commit: Commit) -> str:
    """Render a commit as a changelog list entry.

    Example: ``* **api:** handle null response (abcd1234)``
    """
    line = "* "
    if commit.scope:
        line += f"**{commit.scope}:** "
    return line + f"{commit.message} ({trim_sha(commit.sha)})\n"


def fold(change: Change, commit: Commit) -> Change:
    """Fold one commit into the accumulated change.

    Breaking changes are noted under :data:`BREAKING_CHANGE_KEY` together
    with the commit body, non-conventional commits add no note, and every
    other commit is appended under its type.

    Returns:
        The same ``change`` instance, updated
    """
    change.major = change.major or commit.change.major
    change.minor = change.minor or commit.change.minor
    change.patch = change.patch or commit.change.patch

    if commit.is_breaking:
        entry = f"{format_commit(commit)}\n```{commit.body}\n```\n"
        change.notes[BREAKING_CHANGE_KEY] = change.notes.get(BREAKING_CHANGE_KEY, "") + entry
    elif commit.is_conventional:
        change.notes[commit.type] = change.notes.get(commit.type, "") + format_commit(commit)

    return change


def fold_all(commits: Iterable[Commit], change: Change | None = None) -> Change:
    """Fold commits in order, starting from ``change`` or an empty one."""
    result = change if change is not None else Change()
    for commit in commits:
        fold(result, commit)
    return result
