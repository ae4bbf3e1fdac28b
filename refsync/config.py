"""Configuration management for refsync."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .git_sync import SyncRequest

DEFAULT_CONFIG_DIR = Path("~/.config/refsync").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file misses required keys or values."""


@dataclass(slots=True)
class RefSyncConfig:
    """In-memory representation of the refsync configuration file."""

    git_path: str | None = None
    repositories: dict[str, SyncRequest] = field(default_factory=dict)
    source_path: Path | None = None


def load_config(path: Path | None = None) -> RefSyncConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/refsync/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If mandatory settings are missing or malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    with config_path.open("rb") as fh:
        try:
            raw = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    refsync_section = raw.get("refsync", {})
    if not isinstance(refsync_section, dict):
        raise InvalidConfigError("'refsync' section must be a table")

    git_path_raw = refsync_section.get("git_path")
    if git_path_raw is not None and not isinstance(git_path_raw, str):
        raise InvalidConfigError("'git_path' must be a string when provided")
    git_path = git_path_raw.strip() if git_path_raw else None

    repositories_section = raw.get("repositories", {})
    if not isinstance(repositories_section, dict):
        raise InvalidConfigError("'repositories' section must be a table")

    base_dir = config_path.parent
    repositories: dict[str, SyncRequest] = {}
    for name, entry in repositories_section.items():
        if not isinstance(entry, dict):
            raise InvalidConfigError(f"Repository '{name}' must be a table")
        repositories[name] = _parse_repository(name, entry, base_dir)

    return RefSyncConfig(
        git_path=git_path or None,
        repositories=repositories,
        source_path=config_path,
    )


def _parse_repository(name: str, entry: dict[str, Any], base_dir: Path) -> SyncRequest:
    values: dict[str, str] = {}
    for key in ("location", "url", "ref"):
        value = entry.get(key)
        if not isinstance(value, str):
            raise InvalidConfigError(
                f"'{key}' is required for repository '{name}' and must be a string"
            )
        value = value.strip()
        if not value:
            raise InvalidConfigError(
                f"'{key}' for repository '{name}' must be a non-empty string"
            )
        values[key] = value

    # Relative locations are resolved against the configuration directory.
    location = Path(values["location"]).expanduser()
    if not location.is_absolute():
        location = base_dir / location

    return SyncRequest(
        location=location,
        repository_url=values["url"],
        ref=values["ref"],
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[refsync]\n"
        '# git_path = "/usr/bin/git"\n'
        "\n"
        "[repositories.example]\n"
        'location = "checkouts/example"\n'
        'url = "file:///path/to/example.git"\n'
        'ref = "main"\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
