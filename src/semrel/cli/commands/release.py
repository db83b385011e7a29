"""Implementation of the release pipeline.

Calculates the next version from the commits since the last release
tag and publishes a GitHub release with the rendered changelog.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from semrel.ci import check_travis
from semrel.config import load_config
from semrel.core.changelog import render_changelog
from semrel.core.history import parse_tag_refs, scan_history
from semrel.core.release import get_new_version, resolve_baseline
from semrel.exceptions import SemrelError
from semrel.forge.github import GitHubClient
from semrel.project.outputs import GHR_FILE, VERSION_FILE, write_ghr_file, write_version_file
from semrel.project.updaters import apply_update, default_updaters
from semrel.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

logger = logging.getLogger(__name__)


def run_release(
    path: str | None,
    token: str | None,
    slug: str | None,
    *,
    ghr: bool,
    noci: bool,
    dry: bool,
    version_file: bool,
    update_file: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to the project directory
        token: GitHub token
        slug: Repository slug (owner/repo)
        ghr: Write a .ghr parameter file for ghr
        noci: Skip the CI environment check
        dry: Stop after calculating the version
        version_file: Write a .version file
        update_file: Manifest file to update with the new version
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    if not token:
        err_console.print("[red]Error:[/] github token missing")
        raise SystemExit(1)
    if not slug:
        err_console.print("[red]Error:[/] slug missing")
        raise SystemExit(1)

    try:
        config = load_config(project_path)
        client = GitHubClient(slug, token, api_url=config.github.api_url)
    except SemrelError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    with client:
        try:
            repo = GitRepository(project_path)

            logger.info("getting default branch...")
            info = client.get_info()
            logger.info("found default branch: %s", info.default_branch)

            if not noci:
                logger.info("running CI condition...")
                check_travis(info.default_branch)

            logger.info("getting latest release...")
            context = repo.get_context()

            logger.info("getting tags...")
            tags = parse_tag_refs(client.list_tag_refs(), prefix=config.version.tag_prefix)

            logger.info("getting commits...")
            scan = scan_history(client, context.sha, tags)
            last_tag = resolve_baseline(scan, config.version)
            logger.info("found version: %s", last_tag.version)

            logger.info("calculating new version...")
            new_version = get_new_version(last_tag, scan.change, context, config.version)
        except SemrelError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

        if new_version is None:
            console.print("[yellow]No change: no release required.[/]")
            raise SystemExit(1)
        logger.info("new version: %s", new_version)

        tag_name = new_version.tag_name(config.version.tag_prefix)
        changelog = render_changelog(scan.change, new_version, labels=config.changelog.labels)

        if dry:
            console.print(
                Panel(
                    escape(changelog),
                    title=f"[yellow]Dry Run Preview - {tag_name}[/]",
                    border_style="yellow",
                )
            )
            console.print("[yellow]DRY RUN: no release was created[/]")
            raise SystemExit(1)

        logger.info("creating release...")
        try:
            client.create_release(context.sha, tag_name, changelog)
        except SemrelError as e:
            err_console.print(f"[red]Error creating release:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    try:
        if ghr:
            write_ghr_file(project_path / GHR_FILE, client.owner, client.repo, new_version)
        if version_file:
            write_version_file(project_path / VERSION_FILE, new_version)

        updaters = default_updaters()
        files = list(config.update_files)
        if update_file:
            files.append(update_file)
        for name in files:
            apply_update(project_path / name, str(new_version), updaters)
            console.print(f"  [green]✓[/] Updated version in {name}")
    except (OSError, SemrelError) as e:
        err_console.print(f"[red]Error writing output files:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    logger.info("done.")
    console.print(
        Panel(
            f"[green]Released {tag_name}[/] from {context.branch} ({context.sha[:8]})",
            title="[green]Release Complete[/]",
            border_style="green",
        )
    )
