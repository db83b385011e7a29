"""Exception hierarchy for semrel.

Every error raised by semrel derives from :class:`SemrelError`, so the
command line layer can turn any of them into a clean exit without
catching unrelated exceptions.
"""

from __future__ import annotations


class SemrelError(Exception):
    """Base class for all semrel errors."""


# Configuration


class ConfigError(SemrelError):
    """Configuration is missing or unusable."""


class ConfigNotFoundError(ConfigError):
    """A configuration file could not be found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# Versions


class VersionError(SemrelError):
    """Base class for version related errors."""


class InvalidVersionError(VersionError):
    """Text could not be parsed as a semantic version."""


class NoBaselineTagError(VersionError):
    """History contains no release tag to calculate the next version from."""


# Repository access


class GitError(SemrelError):
    """A local git command failed."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class GitHubError(SemrelError):
    """A GitHub API request failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CIConditionError(SemrelError):
    """The CI environment does not allow a release to run."""


# Project files


class ProjectError(SemrelError):
    """A project file could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """No version field was found in a project file."""


class UpdaterNotFoundError(ProjectError):
    """No version updater is registered for a file name."""
