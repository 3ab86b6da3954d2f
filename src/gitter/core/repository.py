"""Repository handles bound to a client."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from .commands import Options
from .locator import PathLike, has_metadata_dir, is_bare

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


class Repository:
    """A git repository on disk, operated through a :class:`Client`.

    Higher level operations (log, diff, branches...) are built on
    :meth:`run`, which hands a verb, options and arguments to the client.

    Attributes:
        path (str): Path of the repository. Fixed at construction.
        client (Client): Client that runs git for this repository.
    """

    def __init__(self, path: PathLike, client: "Client"):
        """Initialize repository."""
        self._path = os.fspath(path)
        self.client = client

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return Path(self._path).name

    @property
    def bare(self) -> bool:
        """Whether the repository has no separate working tree."""
        return is_bare(self._path) and not has_metadata_dir(self._path)

    def __str__(self) -> str:
        """Return string representation."""
        return f"Repository({self._path})"

    def __repr__(self) -> str:
        """Return string representation."""
        return self.__str__()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repository):
            return NotImplemented
        return self._path == other._path and self.client is other.client

    def __hash__(self) -> int:
        return hash(self._path)

    def create(self, bare: bool = False) -> "Repository":
        """Initialize a new repository at this handle's path.

        The directory is created when missing.

        Args:
            bare: Create a repository without a working tree.

        Returns:
            Repository: This handle.

        Raises:
            CommandFailedError: If ``git init`` fails.
        """
        Path(self._path).mkdir(parents=True, exist_ok=True)
        options = {"--bare": None} if bare else {}
        self.run("init", options)
        logger.info("Created %srepository at %s", "bare " if bare else "", self._path)
        return self

    def run(
        self,
        command: str,
        options: Optional[Options] = None,
        args: Optional[Sequence[str]] = None,
    ) -> str:
        """Run a git command in this repository and return its output."""
        return self.client.run(self, command, options, args)
