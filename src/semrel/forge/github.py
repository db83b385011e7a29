"""GitHub REST API access.

Provides what a release needs from GitHub: repository metadata, the
commit history and tag refs (both paged), and release creation.

Requests are made synchronously with no retries; any failure aborts
the run with a :class:`GitHubError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from semrel.core.commits import RawCommit
from semrel.exceptions import ConfigValidationError, GitHubError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


@dataclass(frozen=True)
class RepositoryInfo:
    default_branch: str
    private: bool


def parse_slug(slug: str) -> tuple[str, str]:
    """Split ``owner/repo`` into its parts.

    Raises:
        ConfigValidationError: If the slug is not of the form owner/repo
    """
    owner, sep, repo = slug.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigValidationError(f"Invalid repository slug: {slug!r} (expected owner/repo)")
    return owner, repo


class GitHubClient:
    """Client for the subset of the GitHub API used by a release."""

    def __init__(
        self,
        slug: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.owner, self.repo = parse_slug(slug)
        self._client = httpx.Client(
            base_url=api_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub request failed: {method} {url}: {e}") from e

        if response.is_error:
            message = _error_message(response)
            raise GitHubError(
                f"GitHub API error {response.status_code} for {method} {url}: {message}",
                status_code=response.status_code,
            )
        return response

    def _paginate(self, url: str, params: dict[str, Any]) -> Iterator[Any]:
        """Yield the decoded JSON of every page, following ``Link: rel="next"``."""
        next_url: str | None = url
        next_params: dict[str, Any] | None = {**params, "per_page": PER_PAGE}

        while next_url is not None:
            response = self._request("GET", next_url, params=next_params)
            yield response.json()
            next_url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            next_params = None

    def get_info(self) -> RepositoryInfo:
        """Fetch the default branch and visibility of the repository."""
        data = self._request("GET", f"/repos/{self.owner}/{self.repo}").json()
        return RepositoryInfo(
            default_branch=data.get("default_branch", ""),
            private=bool(data.get("private", False)),
        )

    def iter_commit_pages(self, start_sha: str) -> Iterator[list[RawCommit]]:
        """Yield pages of commits reachable from ``start_sha``, newest first."""
        url = f"/repos/{self.owner}/{self.repo}/commits"
        for page in self._paginate(url, {"sha": start_sha}):
            logger.debug("Fetched %d commits", len(page))
            yield [
                RawCommit(sha=item["sha"], message=item["commit"]["message"])
                for item in page
            ]

    def list_tag_refs(self) -> list[tuple[str, str]]:
        """List ``(ref name, commit id)`` for every tag of the repository.

        Annotated tags point at a tag object rather than a commit; those are
        resolved to the commit they tag.
        """
        url = f"/repos/{self.owner}/{self.repo}/git/refs/tags"
        items: list[dict[str, Any]] = []
        try:
            for page in self._paginate(url, {}):
                items.extend(page)
        except GitHubError as e:
            # GitHub answers 404 for a repository without any tags
            if e.status_code == 404:
                return []
            raise
        return [(item["ref"], self._resolve_tag_object(item["object"])) for item in items]

    def _resolve_tag_object(self, obj: dict[str, Any]) -> str:
        """Follow annotated tag objects down to the commit id."""
        while obj.get("type", "commit") == "tag":
            logger.debug("Resolving annotated tag object %s", obj["sha"])
            url = f"/repos/{self.owner}/{self.repo}/git/tags/{obj['sha']}"
            obj = self._request("GET", url).json()["object"]
        return obj["sha"]

    def create_release(self, sha: str, tag_name: str, body: str) -> dict[str, Any]:
        """Create a release (and its tag) at commit ``sha``."""
        payload = {
            "tag_name": tag_name,
            "target_commitish": sha,
            "body": body,
        }
        response = self._request(
            "POST",
            f"/repos/{self.owner}/{self.repo}/releases",
            json=payload,
        )
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict):
        return str(data.get("message", data))
    return str(data)
