"""Sync command for refsync CLI."""

from __future__ import annotations

import click

from ..errors import RefSyncError
from ._common import RefSyncCliError, get_app, to_cli_error


@click.command(name="sync")
@click.argument("names", nargs=-1)
@click.option("-d", "--dry-run", is_flag=True, help="Show actions without executing.")
@click.pass_context
def sync(ctx: click.Context, names: tuple[str, ...], dry_run: bool) -> None:
    """Synchronize configured repositories (all of them when NAMES is empty)."""

    app = get_app(ctx)
    repositories = app.config.repositories

    if not repositories:
        click.echo("No repositories configured; nothing to sync.")
        return

    unknown = [name for name in names if name not in repositories]
    if unknown:
        raise RefSyncCliError(f"Unknown repositories: {', '.join(unknown)}")

    selected = list(names) if names else list(repositories)
    for name in selected:
        request = repositories[name]
        if dry_run:
            click.echo(
                f"Dry-run: would sync {name} ({request.repository_url}) "
                f"into {request.location} at {request.ref}"
            )
            continue

        try:
            app.git_sync.sync(request)
        except (RefSyncError, OSError) as exc:
            raise to_cli_error(exc) from exc
        click.echo(f"Synced {name}: {request.location} is at {request.ref}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(sync)
