"""Clone or align a working copy with a ref of a remote repository."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ExecutionFailed
from .executor import CommandExecutor, GitCommandExecutor, find_git
from .locator import HeadKind, LocationState, read_head_kind, resolve_location

logger = logging.getLogger(__name__)

REMOTE_NAME = "origin"


@dataclass(frozen=True, slots=True)
class SyncRequest:
    """A single request to land ``location`` on ``ref`` of ``repository_url``."""

    location: Path
    repository_url: str
    ref: str


class GitSync:
    """Drive git so that a local directory matches a remote ref.

    The instance holds no per-repository state; callers must not run two
    requests against the same location at once.
    """

    def __init__(self, executor: CommandExecutor | None = None) -> None:
        if executor is None:
            executor = GitCommandExecutor(find_git())
        self.executor = executor

    @property
    def git_path(self) -> str:
        return self.executor.tool_path

    def set_git_path(self, path: str) -> None:
        """Use ``path`` as the git executable for subsequent commands."""

        self.executor = GitCommandExecutor(path)

    def sync(self, request: SyncRequest) -> None:
        self.sync_repository_to_remote_branch(
            request.location, request.repository_url, request.ref
        )

    def sync_repository_to_remote_branch(
        self, location: Path | str, repository_url: str, ref: str
    ) -> None:
        """Clone ``repository_url`` into ``location`` or update it, then check out ``ref``.

        Raises the first error encountered; see :mod:`refsync.errors`.
        """

        location = Path(location)
        state = resolve_location(location)

        if state is LocationState.EXISTS_VALID_REPO:
            logger.info("Syncing existing repository at %s to %s", location, ref)
            self.sync_repository(location, repository_url, ref)
        else:
            logger.info("Cloning %s into %s at %s", repository_url, location, ref)
            self.clone_repository(location, repository_url, ref)

    # ---------------------------------------------------------------------
    # Procedures
    # ---------------------------------------------------------------------
    def clone_repository(self, location: Path, repository_url: str, ref: str) -> None:
        self._run_git(None, "clone", repository_url, str(location))
        self._run_git(location, "fetch", "--tags")
        self._run_git(location, "checkout", ref)

    def sync_repository(self, location: Path, repository_url: str, ref: str) -> None:
        # A failing removal is taken to mean the remote did not exist yet.
        try:
            self._run_git(location, "remote", "rm", REMOTE_NAME)
        except ExecutionFailed as exc:
            logger.debug("Ignoring failed remote removal in %s: %s", location, exc)

        self._run_git(location, "remote", "add", REMOTE_NAME, repository_url)
        self._run_git(location, "fetch", REMOTE_NAME)
        self._run_git(location, "checkout", ref)

        if read_head_kind(location) is HeadKind.BRANCH:
            self._run_git(location, "merge", "--ff-only", f"{REMOTE_NAME}/{ref}")
        else:
            logger.debug("%s is detached at %s; skipping merge", location, ref)

    def _run_git(self, cwd: Path | None, *args: str) -> str:
        return self.executor.execute(cwd, *args)
