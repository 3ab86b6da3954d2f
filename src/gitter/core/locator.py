"""Repository detection and validation on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Collection, Union

from .errors import AccessDeniedError, AlreadyExistsError, NotFoundError

PathLike = Union[str, "os.PathLike[str]"]

METADATA_DIR = ".git"
MARKER_FILE = "HEAD"
DESCRIPTION_FILE = "description"


def is_bare(path: PathLike) -> bool:
    """Check if the repository marker sits directly under ``path``."""
    return Path(path, MARKER_FILE).exists()


def has_metadata_dir(path: PathLike) -> bool:
    """Check if ``path`` holds a ``.git`` directory with a marker."""
    return Path(path, METADATA_DIR, MARKER_FILE).exists()


def is_repository(path: PathLike) -> bool:
    """Check if ``path`` is a bare or non-bare repository."""
    return is_bare(path) or has_metadata_dir(path)


def description_path(path: PathLike) -> Path:
    """Return where the description file of the repository at ``path`` lives."""
    if is_bare(path):
        return Path(path, DESCRIPTION_FILE)
    return Path(path, METADATA_DIR, DESCRIPTION_FILE)


def validate_for_create(path: PathLike) -> None:
    """Make sure a repository can be created at ``path``.

    Raises:
        AlreadyExistsError: If either repository marker already exists.
    """
    if is_repository(path):
        raise AlreadyExistsError(os.fspath(path))


def validate_for_open(path: PathLike, hidden: Collection[str] = ()) -> None:
    """Make sure the repository at ``path`` exists and may be accessed.

    Hidden paths are matched by exact string comparison, so callers must
    pass paths in the same form they were configured in.

    Raises:
        NotFoundError: If ``path`` does not exist or holds no repository.
        AccessDeniedError: If ``path`` is on the hidden list.
    """
    path_str = os.fspath(path)
    if not os.path.exists(path_str) or not is_repository(path_str):
        raise NotFoundError(path_str)

    if path_str in hidden:
        raise AccessDeniedError(path_str)
