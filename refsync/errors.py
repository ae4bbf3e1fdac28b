"""Error taxonomy for repository synchronization."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ErrorKind(enum.Enum):
    """Closed set of classified failure kinds."""

    PATH_IS_NOT_A_DIRECTORY = "path-is-not-a-directory"
    DIRECTORY_IS_NOT_A_REPOSITORY = "directory-is-not-a-repository"
    EXECUTION_FAILED = "execution-failed"
    TOOL_NOT_FOUND = "tool-not-found"


@dataclass(frozen=True, slots=True)
class ExitInfo:
    """How a child process terminated.

    ``returncode`` follows :mod:`subprocess` conventions: a negative value
    means the process was killed by that signal number.
    """

    returncode: int

    @property
    def signal(self) -> int | None:
        if self.returncode < 0:
            return -self.returncode
        return None

    def describe(self) -> str:
        if self.signal is not None:
            return f"signal: {self.signal}"
        return f"exit status {self.returncode}"


class RefSyncError(RuntimeError):
    """Base error for classified synchronization failures."""

    kind: ErrorKind


class PathIsNotADirectory(RefSyncError):
    """Raised when a path expected to be a directory is something else."""

    kind = ErrorKind.PATH_IS_NOT_A_DIRECTORY

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"The given path exists, and is not a directory: {path}")
        self.path = Path(path)


class DirectoryIsNotARepository(RefSyncError):
    """Raised when a directory exists but has no git metadata."""

    kind = ErrorKind.DIRECTORY_IS_NOT_A_REPOSITORY

    def __init__(self, path: Path | str) -> None:
        super().__init__(
            f"The given path exists, and is not a git repository: {path}"
        )
        self.path = Path(path)


class ExecutionFailed(RefSyncError):
    """Raised when git ran but exited with a non-zero status."""

    kind = ErrorKind.EXECUTION_FAILED

    def __init__(self, command_line: str, stderr: bytes, exit_info: ExitInfo) -> None:
        super().__init__(
            f"Could not execute command '{command_line}'. Standard error was:\n"
            f"{stderr.decode('utf-8', errors='replace')}\n"
            f" Underlying error was: {exit_info.describe()}"
        )
        self.command_line = command_line
        self.stderr = stderr
        self.exit_info = exit_info

    @property
    def returncode(self) -> int:
        return self.exit_info.returncode


class ToolNotFoundError(RefSyncError):
    """Raised when the git executable cannot be located."""

    kind = ErrorKind.TOOL_NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__(f"Executable '{name}' not found in PATH")
        self.name = name
