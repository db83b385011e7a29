"""Command line interface for semrel."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from semrel import __version__

app = typer.Typer(
    name="semrel",
    help="Release a new semantic version from conventional commits.",
    add_completion=False,
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"semrel v{__version__}")
        raise typer.Exit()


@app.command()
def release(
    token: Annotated[
        str | None,
        typer.Option(envvar=["GITHUB_TOKEN", "GH_TOKEN"], help="GitHub token", show_default=False),
    ] = None,
    slug: Annotated[
        str | None,
        typer.Option(envvar="TRAVIS_REPO_SLUG", help="Slug of the repository (owner/repo)"),
    ] = None,
    ghr: Annotated[
        bool, typer.Option("--ghr", help="Create a .ghr file with the parameters for ghr")
    ] = False,
    noci: Annotated[bool, typer.Option("--noci", help="Run locally, skip the CI check")] = False,
    dry: Annotated[bool, typer.Option("--dry", help="Do not create a release")] = False,
    version_file: Annotated[bool, typer.Option("--vf", help="Create a .version file")] = False,
    update: Annotated[
        str | None,
        typer.Option("--update", help="Update the version of a file (e.g. package.json)"),
    ] = None,
    path: Annotated[
        str | None, typer.Option("--path", "-p", help="Project directory")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    show_version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the semrel version and exit",
        ),
    ] = False,
) -> None:
    """Calculate the next version and publish a GitHub release."""
    from semrel.cli.commands.release import run_release

    setup_logging(verbose)
    run_release(
        path=path,
        token=token,
        slug=slug,
        ghr=ghr,
        noci=noci,
        dry=dry,
        version_file=version_file,
        update_file=update,
        console=console,
        err_console=err_console,
    )


def main() -> None:
    app()
