"""Shared helpers for refsync CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..config import ConfigError, MissingConfigError
from ..errors import ExecutionFailed, RefSyncError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class RefSyncCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")

    try:
        app = bootstrap(config_path_opt)
    except MissingConfigError as exc:
        raise RefSyncCliError(
            "Configuration not found. Run 'refsync config' once to set up refsync."
        ) from exc
    except (ConfigError, RefSyncError) as exc:
        raise RefSyncCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app


def to_cli_error(exc: Exception) -> RefSyncCliError:
    """Map a synchronization failure onto a user-facing message."""

    if isinstance(exc, ExecutionFailed):
        stderr = exc.stderr.decode("utf-8", errors="replace").strip()
        message = f"'{exc.command_line}' failed ({exc.exit_info.describe()})"
        if stderr:
            message = f"{message}:\n{stderr}"
        return RefSyncCliError(message)
    return RefSyncCliError(str(exc))
