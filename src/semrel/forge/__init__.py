"""Code hosting integrations."""

from __future__ import annotations

from semrel.forge.github import GitHubClient, RepositoryInfo, parse_slug

__all__ = ["GitHubClient", "RepositoryInfo", "parse_slug"]
