"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from semrel.core.commits import RawCommit, classify
from semrel.core.history import Tag
from semrel.core.version import Version

if TYPE_CHECKING:
    from pathlib import Path

    from semrel.core.commits import Commit


class FakeCommitSource:
    """In-memory commit history served in fixed pages."""

    def __init__(self, pages: list[list[RawCommit]]) -> None:
        self.pages = pages
        self.requested_pages = 0
        self.start_sha: str | None = None

    def iter_commit_pages(self, start_sha: str) -> Iterator[list[RawCommit]]:
        self.start_sha = start_sha
        for page in self.pages:
            self.requested_pages += 1
            yield page


@pytest.fixture
def feat_commit() -> Commit:
    return classify(["feat: add user authentication"], "feat1234567890")


@pytest.fixture
def fix_commit() -> Commit:
    return classify(["fix(core): resolve memory leak"], "fix12345678901")


@pytest.fixture
def breaking_commit() -> Commit:
    return classify(
        ["feat(api): change response format", "", "BREAKING CHANGE: responses are JSON"],
        "break123456789",
    )


@pytest.fixture
def sample_history() -> list[RawCommit]:
    """Newest-first history: four commits, then the v1.2.3 release commit."""
    return [
        RawCommit("a" * 40, "feat(cli): add --dry flag"),
        RawCommit("b" * 40, "fix: handle empty history"),
        RawCommit("c" * 40, "Merge branch 'topic'"),
        RawCommit("d" * 40, "docs: describe configuration"),
        RawCommit("e" * 40, "chore(release): 1.2.3"),
        RawCommit("f" * 40, "feat: ancient feature"),
    ]


@pytest.fixture
def release_tag() -> Tag:
    return Tag(sha="e" * 40, version=Version(1, 2, 3))


@pytest.fixture
def pyproject_project(tmp_path: Path) -> Path:
    """Project directory with a pyproject.toml carrying semrel settings."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.semrel]
update_files = ["pyproject.toml"]

[tool.semrel.version]
release_branch = "main"
missing_tag_policy = "initial"
"""
    )
    return tmp_path


@pytest.fixture
def make_source() -> type[FakeCommitSource]:
    """Factory for paged in-memory commit sources."""
    return FakeCommitSource
