"""Config command for refsync CLI."""

from __future__ import annotations

from pathlib import Path

import click

from .. import config as config_module
from ._common import RefSyncCliError


def _selected_config_path(ctx: click.Context) -> Path:
    selected: Path | None = ctx.obj.get("config_path")
    return (selected or config_module.DEFAULT_CONFIG_PATH).expanduser()


@click.command(name="config")
@click.option(
    "--no-edit",
    is_flag=True,
    help="Create the file if needed and print its path without opening an editor.",
)
@click.pass_context
def config(ctx: click.Context, no_edit: bool) -> None:
    """Create the configuration file when missing and open it for editing."""

    config_path = _selected_config_path(ctx)
    if config_module.bootstrap_config_file(config_path):
        click.echo(f"Wrote default configuration to {config_path}")

    if no_edit:
        click.echo(str(config_path))
        return

    try:
        click.edit(filename=str(config_path))
    except (OSError, click.ClickException) as exc:  # pragma: no cover - needs a broken $EDITOR
        raise RefSyncCliError(f"Could not open {config_path} in an editor: {exc}") from exc

    click.echo(f"Edited {config_path}; run 'refsync info' to check it.")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(config)
