"""Pin a local working copy to a ref of a remote git repository."""

from .errors import (
    DirectoryIsNotARepository,
    ErrorKind,
    ExecutionFailed,
    PathIsNotADirectory,
    RefSyncError,
    ToolNotFoundError,
)
from .git_sync import GitSync, SyncRequest

__all__ = [
    "DirectoryIsNotARepository",
    "ErrorKind",
    "ExecutionFailed",
    "GitSync",
    "PathIsNotADirectory",
    "RefSyncError",
    "SyncRequest",
    "ToolNotFoundError",
]
