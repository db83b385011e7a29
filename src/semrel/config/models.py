"""Pydantic models for semrel configuration.

All settings are optional; a project without a ``[tool.semrel]`` table
gets the defaults below. Credentials are never read from files, they
come from the command line or the environment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from semrel.core.version import Version
from semrel.exceptions import InvalidVersionError

MissingTagPolicy = Literal["fail", "initial"]


class GitHubConfig(BaseModel):
    """GitHub API settings."""

    model_config = ConfigDict(extra="forbid")

    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL (change for GitHub Enterprise)",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class VersionConfig(BaseModel):
    """Version calculation settings."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str = Field(default="v", description="Prefix of created release tags")
    release_branch: str = Field(
        default="master",
        description="Branch producing final releases without a pre-release label",
    )
    prerelease_tokens: dict[str, str] = Field(
        default_factory=lambda: {"develop": "beta"},
        description="Pre-release label per branch; other branches use their own name",
    )
    missing_tag_policy: MissingTagPolicy = Field(
        default="fail",
        description="What to do when history has no release tag: fail, or start from initial_version",
    )
    initial_version: str = Field(
        default="0.0.0",
        description="Baseline version used by the 'initial' missing tag policy",
    )

    @field_validator("initial_version")
    @classmethod
    def validate_initial_version(cls, value: str) -> str:
        try:
            Version.parse(value)
        except InvalidVersionError as e:
            raise ValueError(str(e)) from e
        return value


class ChangelogConfig(BaseModel):
    """Changelog rendering settings."""

    model_config = ConfigDict(extra="forbid")

    labels: dict[str, str] = Field(
        default_factory=dict,
        description="Section titles per commit type, merged over the built-in ones",
    )


class SemrelConfig(BaseModel):
    """Root configuration, read from ``[tool.semrel]``."""

    model_config = ConfigDict(extra="forbid")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    update_files: list[str] = Field(
        default_factory=list,
        description="Manifest files whose version is updated after a release",
    )
