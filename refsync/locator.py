"""Classify a target path before deciding whether to clone or sync."""

from __future__ import annotations

import enum
import os
import stat
from pathlib import Path

from .errors import DirectoryIsNotARepository, PathIsNotADirectory

METADATA_DIRNAME = ".git"
HEAD_FILENAME = "HEAD"
SYMBOLIC_REF_PREFIX = b"ref: "


class LocationState(enum.Enum):
    ABSENT = "absent"
    EXISTS_NOT_DIRECTORY = "exists-not-directory"
    EXISTS_DIRECTORY_NOT_REPO = "exists-directory-not-repo"
    EXISTS_VALID_REPO = "exists-valid-repo"


class HeadKind(enum.Enum):
    BRANCH = "branch"
    DETACHED = "detached"


def _stat_or_none(path: Path) -> os.stat_result | None:
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None


def classify_location(location: Path | str) -> LocationState:
    """Return the state of ``location`` without validating its parent.

    A metadata entry that exists but is not a directory counts as
    ``EXISTS_DIRECTORY_NOT_REPO``. Stat errors other than "does not exist"
    propagate.
    """

    location = Path(location)
    try:
        st = _stat_or_none(location)
    except NotADirectoryError:
        st = None
    if st is None:
        return LocationState.ABSENT
    if not stat.S_ISDIR(st.st_mode):
        return LocationState.EXISTS_NOT_DIRECTORY

    metadata = _stat_or_none(location / METADATA_DIRNAME)
    if metadata is None or not stat.S_ISDIR(metadata.st_mode):
        return LocationState.EXISTS_DIRECTORY_NOT_REPO
    return LocationState.EXISTS_VALID_REPO


def resolve_location(location: Path | str) -> LocationState:
    """Validate ``location`` and return either ``ABSENT`` or ``EXISTS_VALID_REPO``.

    Raises
    ------
    PathIsNotADirectory
        If ``location``, its ``.git`` entry, or (when ``location`` is absent)
        its parent exists but is not a directory.
    DirectoryIsNotARepository
        If ``location`` is a directory without a ``.git`` entry.
    OSError
        Any stat failure other than "does not exist", unchanged. This
        includes a missing parent directory.
    """

    location = Path(location)
    try:
        st = _stat_or_none(location)
    except NotADirectoryError:
        # A path component is a regular file; the parent check below
        # reports which one.
        st = None

    if st is not None:
        if not stat.S_ISDIR(st.st_mode):
            raise PathIsNotADirectory(location)

        metadata_path = location / METADATA_DIRNAME
        metadata = _stat_or_none(metadata_path)
        if metadata is None:
            raise DirectoryIsNotARepository(location)
        if not stat.S_ISDIR(metadata.st_mode):
            raise PathIsNotADirectory(metadata_path)
        return LocationState.EXISTS_VALID_REPO

    parent = location.parent
    parent_st = os.stat(parent)
    if not stat.S_ISDIR(parent_st.st_mode):
        raise PathIsNotADirectory(parent)
    return LocationState.ABSENT


def read_head_kind(location: Path | str) -> HeadKind:
    """Tell whether the checkout at ``location`` is on a branch."""

    head = (Path(location) / METADATA_DIRNAME / HEAD_FILENAME).read_bytes()
    if head.startswith(SYMBOLIC_REF_PREFIX):
        return HeadKind.BRANCH
    return HeadKind.DETACHED
