"""Local git checkout access.

Only the state of HEAD is read locally; the history itself comes from
the GitHub API.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from semrel.core.release import ReleaseContext
from semrel.exceptions import GitError

logger = logging.getLogger(__name__)


class GitRepository:
    """A local git working tree."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")
        if self._run("rev-parse", "--is-inside-work-tree") != "true":
            raise GitError(f"Not a git working tree: {self.path}")

    def _run(self, *args: str) -> str:
        """Run a git command in the repository and return its stripped output.

        Raises:
            GitError: If git is missing or the command fails
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def get_head_branch(self) -> str:
        """Short name of the checked out branch.

        Raises:
            GitError: If HEAD is detached
        """
        branch = self._run("rev-parse", "--abbrev-ref", "HEAD")
        if branch == "HEAD":
            raise GitError("HEAD is detached; check out the branch to release")
        return branch

    def get_head_sha(self) -> str:
        return self._run("rev-parse", "HEAD")

    def get_context(self) -> ReleaseContext:
        return ReleaseContext(branch=self.get_head_branch(), sha=self.get_head_sha())
