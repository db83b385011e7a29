"""Commit history scanning back to the last release tag."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from semrel.core.commits import Change, RawCommit, fold, parse_commit
from semrel.core.version import Version, parse_version
from semrel.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True)
class Tag:
    """A released version and the commit it points at."""

    sha: str
    version: Version


class BaselineStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass
class HistoryScan:
    """Outcome of walking history back to the last release."""

    change: Change = field(default_factory=Change)
    last_tag: Tag | None = None
    commit_count: int = 0

    @property
    def status(self) -> BaselineStatus:
        return BaselineStatus.FOUND if self.last_tag is not None else BaselineStatus.NOT_FOUND


class CommitSource(Protocol):
    """Paged access to commit history, newest first."""

    def iter_commit_pages(self, start_sha: str) -> Iterator[list[RawCommit]]: ...


def parse_tag_refs(refs: Iterable[tuple[str, str]], prefix: str = "v") -> list[Tag]:
    """Build release tags from ``(ref name, commit id)`` pairs.

    The tag ``prefix`` used when creating releases is stripped before
    parsing; plain ``v1.2.3`` and ``1.2.3`` names are accepted as well.
    Refs whose remaining name is not a semantic version are skipped.
    """
    tags = []
    for ref, sha in refs:
        name = ref.removeprefix(TAG_REF_PREFIX).removeprefix(prefix)
        try:
            version = parse_version(name)
        except InvalidVersionError:
            logger.debug("Skipping non-version tag ref %s", ref)
            continue
        tags.append(Tag(sha=sha, version=version))
    return tags


def scan_history(source: CommitSource, current_sha: str, tags: Iterable[Tag]) -> HistoryScan:
    """Classify and fold every commit since the last release tag.

    History is read page by page starting at ``current_sha``. The first
    commit that a tag points at ends the scan: it belongs to the previous
    release and is not part of the new change, and no further pages are
    requested.

    Args:
        source: Repository access providing commit pages
        current_sha: Commit the release is made from
        tags: Known release tags

    Returns:
        The folded change and the matched tag. ``last_tag`` is None when no
        tag was found in the whole history.
    """
    tags_by_sha = {}
    for tag in tags:
        tags_by_sha.setdefault(tag.sha, tag)

    scan = HistoryScan()

    for page in source.iter_commit_pages(current_sha):
        for raw in page:
            tag = tags_by_sha.get(raw.sha)
            if tag is not None:
                logger.info("found last tag: %s", tag.version)
                scan.last_tag = tag
                return scan

            fold(scan.change, parse_commit(raw))
            scan.commit_count += 1

    logger.info("no last tag found in history")
    return scan
