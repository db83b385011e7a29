"""Next version calculation.

Given the last release tag, the change accumulated since then and the
branch being released, decide the next version:

1. A ``0.x`` baseline always gets a major bump.
2. Exactly one increment is applied, major > minor > patch.
3. The branch decides the pre-release label: the release branch gets none,
   ``develop`` gets ``beta.N`` and any other branch ``<branch>.N``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from semrel.core.history import BaselineStatus, Tag
from semrel.core.version import BumpType, Version
from semrel.exceptions import NoBaselineTagError

if TYPE_CHECKING:
    from semrel.config.models import VersionConfig
    from semrel.core.commits import Change
    from semrel.core.history import HistoryScan

logger = logging.getLogger(__name__)

DEFAULT_RELEASE_BRANCH = "master"
DEFAULT_PRERELEASE_TOKENS = {"develop": "beta"}

_INVALID_LABEL_CHARS = re.compile(r"[^0-9A-Za-z\-]")


@dataclass(frozen=True)
class ReleaseContext:
    """The checkout a release is made from."""

    branch: str
    sha: str


def prerelease_token(
    branch: str,
    *,
    release_branch: str = DEFAULT_RELEASE_BRANCH,
    tokens: dict[str, str] | None = None,
) -> str:
    """Pre-release base label for a branch; empty for the release branch."""
    if branch == release_branch:
        return ""
    if tokens is None:
        tokens = DEFAULT_PRERELEASE_TOKENS
    # Branch names like "feature/x" are not valid pre-release identifiers
    return tokens.get(branch, _INVALID_LABEL_CHARS.sub("-", branch))


def calculate_prerelease(
    branch: str,
    previous: Version,
    config: VersionConfig | None = None,
) -> str:
    """Pre-release label for a new version built on ``branch``.

    The counter continues from the previous release when it carried the
    same label (``beta.2`` -> ``beta.3``) and starts at 1 otherwise.

    Args:
        branch: Branch being released
        previous: Version of the last release
        config: Branch settings; defaults when omitted

    Returns:
        Label such as ``beta.3``, or an empty string for final releases
    """
    if config is None:
        token = prerelease_token(branch)
    else:
        token = prerelease_token(
            branch,
            release_branch=config.release_branch,
            tokens=config.prerelease_tokens,
        )

    if not token:
        return ""

    parts = previous.prerelease.split(".")
    if parts[0] != token:
        return f"{token}.1"

    try:
        counter = int(parts[1])
    except (IndexError, ValueError):
        logger.warning(
            "Cannot continue pre-release numbering from %r, restarting at %s.1",
            previous.prerelease,
            token,
        )
        return f"{token}.1"

    return f"{token}.{counter + 1}"


def get_new_version(
    last_tag: Tag,
    change: Change,
    context: ReleaseContext,
    config: VersionConfig | None = None,
) -> Version | None:
    """Calculate the version to release.

    Args:
        last_tag: Most recent release tag
        change: Change accumulated since that tag
        context: Branch and commit being released
        config: Version settings; defaults when omitted

    Returns:
        The new version, or None when no release is required
    """
    version = last_tag.version

    bump = change.bump
    if version.major == 0:
        # Every release of a 0.x line is treated as potentially breaking
        bump = BumpType.MAJOR

    if bump is BumpType.NONE:
        return None

    new_version = version.bump(bump)
    prerelease = calculate_prerelease(context.branch, version, config)
    return new_version.with_prerelease(prerelease)


def resolve_baseline(scan: HistoryScan, config: VersionConfig) -> Tag:
    """Pick the release the next version is calculated from.

    Raises:
        NoBaselineTagError: If history has no release tag and the policy is ``fail``
    """
    if scan.status is BaselineStatus.FOUND and scan.last_tag is not None:
        return scan.last_tag

    if config.missing_tag_policy == "initial":
        logger.info("no release tag found, starting from %s", config.initial_version)
        return Tag(sha="", version=Version.parse(config.initial_version))

    raise NoBaselineTagError(
        "No release tag found in the commit history. Create an initial tag "
        "(e.g. v0.1.0) or set missing_tag_policy = \"initial\" in [tool.semrel.version]."
    )
