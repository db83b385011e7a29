"""CI environment conditions.

A release should only run from a CI build of the default branch, never
from a pull request build. Only Travis CI is recognized.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from semrel.exceptions import CIConditionError

logger = logging.getLogger(__name__)


def check_travis(default_branch: str, env: Mapping[str, str] | None = None) -> None:
    """Verify that the current Travis CI build may release.

    Raises:
        CIConditionError: If not on Travis, on a pull request build, or on
            another branch than ``default_branch``
    """
    if env is None:
        env = os.environ

    if env.get("TRAVIS") != "true":
        raise CIConditionError("Not running on Travis CI, no new version will be published.")

    if env.get("TRAVIS_PULL_REQUEST", "false") != "false":
        raise CIConditionError(
            "Build was triggered by a pull request, no new version will be published."
        )

    branch = env.get("TRAVIS_BRANCH", "")
    if branch != default_branch:
        raise CIConditionError(
            f"Build was triggered on branch {branch!r}, releases are only "
            f"published from {default_branch!r}."
        )

    logger.debug("Travis CI condition met for branch %s", branch)
