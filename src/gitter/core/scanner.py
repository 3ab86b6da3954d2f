"""Repository discovery under a directory tree.

The scanner walks a tree depth first and stops descending at the first
repository it meets on each branch of the tree, so the ``.git`` directory
of a working copy is never mistaken for a container of more repositories.
Dot entries are skipped at every level. Repositories on the hidden list
are dropped along with everything below them.

Example:
    ```python
    from gitter.core.scanner import RepositoryScanner

    scanner = RepositoryScanner(hidden=["/srv/git/private"])
    for listing in scanner.scan("/srv/git"):
        print(listing.name, listing.path, listing.description)
    ```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Collection, List, Set

from .errors import NoRepositoriesFoundError, NotFoundError
from .locator import PathLike, description_path, is_repository

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = (
    "There is no repository description file. Please, create one to remove this message."
)


@dataclass(frozen=True, order=True)
class RepositoryListing:
    """A repository found by a scan."""

    name: str
    path: str
    description: str


def read_description(path: PathLike) -> str:
    """Read the description of the repository at ``path``, or the placeholder."""
    description_file = description_path(path)
    if description_file.is_file():
        return description_file.read_text(encoding="utf-8", errors="replace")
    return DEFAULT_DESCRIPTION


class RepositoryScanner:
    """Finds repositories below a root directory.

    Attributes:
        hidden (Collection[str]): Repository paths to leave out, compared
            by exact string match against ``os.path.join(parent, name)``.
    """

    def __init__(self, hidden: Collection[str] = ()):
        """Initialize the scanner."""
        self.hidden = hidden

    def scan(self, root: PathLike) -> List[RepositoryListing]:
        """Scan ``root`` and return the sorted repositories found.

        Raises:
            NotFoundError: If ``root`` is not a directory.
            NoRepositoriesFoundError: If nothing was found.
        """
        root_str = os.fspath(root)
        if not os.path.isdir(root_str):
            raise NotFoundError(root_str, f"There is no directory at {root_str}")

        repositories = self._walk(root_str)
        if not repositories:
            raise NoRepositoriesFoundError(root_str)

        repositories.sort()
        logger.debug("Found %d repositories in %s", len(repositories), root_str)
        return repositories

    def _walk(self, root: str) -> List[RepositoryListing]:
        repositories: List[RepositoryListing] = []
        visited: Set[str] = {os.path.realpath(root)}
        pending = [root]

        while pending:
            directory = pending.pop()
            with os.scandir(directory) as entries:
                children = sorted(entries, key=lambda entry: entry.name)

            # Reversed so the stack pops children in name order.
            for entry in reversed(children):
                if entry.name.startswith("."):
                    continue
                if not entry.is_dir():
                    continue

                path = os.path.join(directory, entry.name)
                if is_repository(path):
                    if path in self.hidden:
                        logger.debug("Skipping hidden repository %s", path)
                        continue
                    repositories.append(
                        RepositoryListing(entry.name, path, read_description(path))
                    )
                    continue

                real_path = os.path.realpath(path)
                if real_path in visited:
                    logger.debug("Skipping already visited directory %s", path)
                    continue
                visited.add(real_path)
                pending.append(path)

        return repositories
