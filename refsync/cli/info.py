"""Info command for refsync CLI."""

from __future__ import annotations

import click

from ..locator import classify_location
from ._common import get_app


@click.command(name="info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display configuration and the state of each configured location."""

    app = get_app(ctx)
    config = app.config

    click.echo("refsync info:\n")
    click.echo(f"  Config file : {config.source_path}")
    click.echo(f"  Git         : {app.git_sync.git_path}")

    if not config.repositories:
        click.echo("\nNo repositories configured.")
        return

    click.echo("\nRepositories:\n")
    for name, request in config.repositories.items():
        try:
            state = classify_location(request.location).value
        except OSError as exc:
            state = f"unreadable ({exc.strerror or exc})"
        click.echo(f"  {name}")
        click.echo(f"    location : {request.location} [{state}]")
        click.echo(f"    url      : {request.repository_url}")
        click.echo(f"    ref      : {request.ref}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(info)
