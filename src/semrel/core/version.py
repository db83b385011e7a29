"""Semantic version parsing and manipulation.

Versions follow https://semver.org. Parsing is deliberately lenient in
the same places common semver tooling is: a leading ``v`` is accepted and
missing minor/patch components default to zero, so tags such as ``v1``
or ``1.2`` are still recognized as releases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum

from semrel.exceptions import InvalidVersionError

_IDENTIFIERS = r"[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*"

VERSION_PATTERN = re.compile(
    r"^v?(?P<major>[0-9]+)"
    r"(?:\.(?P<minor>[0-9]+))?"
    r"(?:\.(?P<patch>[0-9]+))?"
    rf"(?:-(?P<prerelease>{_IDENTIFIERS}))?"
    rf"(?:\+(?P<build>{_IDENTIFIERS}))?$"
)


class BumpType(str, Enum):
    """Kind of version increment implied by a set of changes."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Version:
    """An immutable semantic version.

    Every bump returns a new instance; nothing mutates in place.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string such as ``v1.2.3-beta.1``.

        Raises:
            InvalidVersionError: If the text is not a semantic version
        """
        match = VERSION_PATTERN.match(text.strip())
        if match is None:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=match.group("prerelease") or "",
            build=match.group("build") or "",
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def bump(self, bump_type: BumpType) -> Version:
        """Apply a single increment of the given kind."""
        if bump_type is BumpType.MAJOR:
            return self.bump_major()
        if bump_type is BumpType.MINOR:
            return self.bump_minor()
        if bump_type is BumpType.PATCH:
            return self.bump_patch()
        return self

    def bump_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        # A pre-release of x.y.z already precedes x.y.z, so releasing the
        # patch only drops the label.
        if self.is_prerelease:
            return Version(self.major, self.minor, self.patch)
        return Version(self.major, self.minor, self.patch + 1)

    def with_prerelease(self, prerelease: str) -> Version:
        """Return a copy carrying ``prerelease`` (empty string removes it)."""
        if prerelease and not re.fullmatch(_IDENTIFIERS, prerelease):
            raise InvalidVersionError(f"Invalid pre-release label: {prerelease!r}")
        return replace(self, prerelease=prerelease)

    def tag_name(self, prefix: str = "v") -> str:
        """Release tag for this version, e.g. ``v1.2.3-beta.1``."""
        tag = f"{prefix}{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            tag += f"-{self.prerelease}"
        return tag

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_version(text: str) -> Version:
    """Parse a version string. See :meth:`Version.parse`."""
    return Version.parse(text)
