"""Application bootstrap and context container for refsync."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import RefSyncConfig, load_config
from .executor import GitCommandExecutor
from .git_sync import GitSync


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: RefSyncConfig
    git_sync: GitSync


def build_git_sync(git_path: str | None = None) -> GitSync:
    """Return a ``GitSync`` using ``git_path`` or the git found on ``PATH``."""

    if git_path:
        return GitSync(GitCommandExecutor(git_path))
    return GitSync()


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration and locate the git executable."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)
    git_sync = build_git_sync(config.git_path)
    return AppContext(config=config, git_sync=git_sync)
