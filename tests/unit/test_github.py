"""Tests for the GitHub API client."""

from __future__ import annotations

import json

import httpx
import pytest

from semrel.core.commits import RawCommit
from semrel.exceptions import ConfigValidationError, GitHubError
from semrel.forge.github import GitHubClient, RepositoryInfo, parse_slug

API = "https://api.github.com"


def make_client(handler) -> GitHubClient:
    return GitHubClient("owner/repo", "secret", transport=httpx.MockTransport(handler))


def commit_item(sha: str, message: str) -> dict:
    return {"sha": sha, "commit": {"message": message}}


class TestParseSlug:
    def test_valid(self):
        assert parse_slug("owner/repo") == ("owner", "repo")

    @pytest.mark.parametrize("slug", ["repo", "/repo", "owner/", "a/b/c", ""])
    def test_invalid(self, slug: str):
        with pytest.raises(ConfigValidationError):
            parse_slug(slug)


class TestGetInfo:
    def test_info(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/repos/owner/repo"
            assert request.headers["Authorization"] == "Bearer secret"
            return httpx.Response(200, json={"default_branch": "main", "private": True})

        with make_client(handler) as client:
            assert client.get_info() == RepositoryInfo(default_branch="main", private=True)

    def test_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Bad credentials"})

        with make_client(handler) as client, pytest.raises(GitHubError) as exc_info:
            client.get_info()

        assert exc_info.value.status_code == 401
        assert "Bad credentials" in str(exc_info.value)

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client, pytest.raises(GitHubError, match="request failed"):
            client.get_info()


class TestIterCommitPages:
    def test_follows_next_links(self):
        """Pages are requested until no next link remains."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=[commit_item("c2", "fix: two")])
            return httpx.Response(
                200,
                json=[commit_item("c1", "feat: one\n\nbody")],
                headers={
                    "Link": f'<{API}/repos/owner/repo/commits?sha=head&page=2>; rel="next"'
                },
            )

        with make_client(handler) as client:
            pages = list(client.iter_commit_pages("head"))

        assert pages == [
            [RawCommit("c1", "feat: one\n\nbody")],
            [RawCommit("c2", "fix: two")],
        ]
        assert seen[0].params["sha"] == "head"
        assert seen[0].params["per_page"] == "100"
        assert len(seen) == 2

    def test_is_lazy(self):
        """Later pages are only fetched when consumed."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(
                200,
                json=[commit_item("c1", "feat: one")],
                headers={"Link": f'<{API}/repos/owner/repo/commits?page=2>; rel="next"'},
            )

        with make_client(handler) as client:
            next(client.iter_commit_pages("head"))

        assert len(calls) == 1

    def test_failing_page_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("page") == "2":
                return httpx.Response(502, text="Bad gateway")
            return httpx.Response(
                200,
                json=[commit_item("c1", "feat: one")],
                headers={"Link": f'<{API}/repos/owner/repo/commits?page=2>; rel="next"'},
            )

        with make_client(handler) as client, pytest.raises(GitHubError) as exc_info:
            list(client.iter_commit_pages("head"))

        assert exc_info.value.status_code == 502


class TestListTagRefs:
    def test_refs(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/repos/owner/repo/git/refs/tags"
            return httpx.Response(
                200,
                json=[
                    {"ref": "refs/tags/v1.0.0", "object": {"sha": "s1"}},
                    {"ref": "refs/tags/nightly", "object": {"sha": "s2"}},
                ],
            )

        with make_client(handler) as client:
            assert client.list_tag_refs() == [
                ("refs/tags/v1.0.0", "s1"),
                ("refs/tags/nightly", "s2"),
            ]

    def test_no_tags(self):
        """GitHub answers 404 when a repository has no tags."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        with make_client(handler) as client:
            assert client.list_tag_refs() == []

    def test_other_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "boom"})

        with make_client(handler) as client, pytest.raises(GitHubError):
            client.list_tag_refs()

    def test_annotated_tags_resolve_to_commit(self):
        """Annotated tag refs point at a tag object, which names the commit."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/repos/owner/repo/git/refs/tags":
                return httpx.Response(
                    200,
                    json=[
                        {"ref": "refs/tags/v1.0.0", "object": {"sha": "c1", "type": "commit"}},
                        {"ref": "refs/tags/v1.1.0", "object": {"sha": "t2", "type": "tag"}},
                    ],
                )
            assert request.url.path == "/repos/owner/repo/git/tags/t2"
            return httpx.Response(200, json={"sha": "t2", "object": {"sha": "c2", "type": "commit"}})

        with make_client(handler) as client:
            assert client.list_tag_refs() == [
                ("refs/tags/v1.0.0", "c1"),
                ("refs/tags/v1.1.0", "c2"),
            ]

    def test_tag_object_lookup_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/repos/owner/repo/git/refs/tags":
                return httpx.Response(
                    200, json=[{"ref": "refs/tags/v1.0.0", "object": {"sha": "t1", "type": "tag"}}]
                )
            return httpx.Response(404, json={"message": "Not Found"})

        with make_client(handler) as client, pytest.raises(GitHubError) as exc_info:
            client.list_tag_refs()

        assert exc_info.value.status_code == 404


class TestCreateRelease:
    def test_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/repos/owner/repo/releases"
            assert json.loads(request.content) == {
                "tag_name": "v1.1.0",
                "target_commitish": "abc",
                "body": "## 1.1.0",
            }
            return httpx.Response(201, json={"id": 1, "tag_name": "v1.1.0"})

        with make_client(handler) as client:
            release = client.create_release("abc", "v1.1.0", "## 1.1.0")

        assert release["id"] == 1

    def test_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"message": "Validation Failed"})

        with make_client(handler) as client, pytest.raises(GitHubError, match="422"):
            client.create_release("abc", "v1.1.0", "body")
