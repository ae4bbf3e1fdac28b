"""Pin command for refsync CLI."""

from __future__ import annotations

from pathlib import Path

import click

from ..app import build_git_sync
from ..errors import RefSyncError
from ._common import to_cli_error


@click.command(name="pin")
@click.argument("location", type=click.Path(path_type=Path))
@click.argument("url")
@click.argument("ref")
@click.option(
    "--git",
    "git_path",
    default=None,
    help="Git executable to use instead of the one found on PATH.",
)
def pin(location: Path, url: str, ref: str, git_path: str | None) -> None:
    """Clone URL into LOCATION or align it with the remote, then check out REF."""

    try:
        git_sync = build_git_sync(git_path)
        git_sync.sync_repository_to_remote_branch(location, url, ref)
    except (RefSyncError, OSError) as exc:
        raise to_cli_error(exc) from exc

    click.echo(f"{location} is at {ref}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(pin)
