"""Git client: the entry point for creating, opening, cloning and listing repositories."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .commands import CommandBuilder, Options
from .config import ClientConfig
from .locator import PathLike, validate_for_create, validate_for_open
from .process import ProcessRunner
from .repository import Repository
from .scanner import RepositoryListing, RepositoryScanner

logger = logging.getLogger(__name__)


class Client:
    """Runs git on behalf of repository handles.

    A client owns the git executable path, the hidden repository list and
    the environment given to git processes. The settings live in an
    immutable :class:`ClientConfig`; changing the environment swaps in a
    new config, so a command always runs with a consistent snapshot.

    Example:
        ```python
        from gitter.core.client import Client

        client = Client({"hidden": ["/srv/git/private"]})
        repo = client.get_repository("/srv/git/project")
        print(repo.run("log", {"-n": "1"}))

        client.set_ssh_passphrase("secret")
        client.clone_repository("git@example.com:team/app.git", "/srv/git/app")
        ```
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        config: Optional[ClientConfig] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        """Initialize the client.

        Args:
            options: ``{path, hidden, env}`` mapping. Ignored when ``config``
                is given.
            config: Ready made configuration.
            runner: Process runner. Defaults to one with the standard timeout.

        Raises:
            ConfigError: If ``options`` is malformed.
        """
        self._config = config if config is not None else ClientConfig.from_options(options)
        self.runner = runner or ProcessRunner()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def path(self) -> str:
        """Path of the git executable."""
        return self._config.path

    @property
    def hidden(self) -> Tuple[str, ...]:
        """Repository paths that are never listed or opened."""
        return self._config.hidden

    @property
    def env(self) -> Optional[Dict[str, str]]:
        """Environment given to git processes, or ``None`` to inherit."""
        return dict(self._config.env) if self._config.env else None

    def set_env(self, env: Optional[Mapping[str, str]]) -> "Client":
        """Replace the environment given to git processes."""
        self._config = self._config.with_env(env)
        return self

    def set_ssh_passphrase(self, passphrase: Optional[str] = None) -> None:
        """Set the passphrase used to unlock the SSH key for remote commands.

        Git's ssh is pointed at a helper script that echoes the passphrase,
        so no terminal prompt is needed. Passing ``None`` removes the
        helper settings again.
        """
        self._config = self._config.with_passphrase(passphrase)
        logger.debug("SSH passphrase %s", "cleared" if passphrase is None else "set")

    def create_repository(self, path: PathLike, bare: bool = False) -> Repository:
        """Create a new repository at ``path``.

        Raises:
            AlreadyExistsError: If a repository already exists at ``path``.
            CommandFailedError: If ``git init`` fails.
        """
        validate_for_create(path)
        return Repository(path, self).create(bare)

    def get_repository(self, path: PathLike) -> Repository:
        """Open the repository at ``path``.

        Raises:
            NotFoundError: If there is no repository at ``path``.
            AccessDeniedError: If ``path`` is hidden.
        """
        validate_for_open(path, self.hidden)
        return Repository(path, self)

    def get_repositories(self, path: PathLike) -> List[RepositoryListing]:
        """Find the repositories below ``path``, sorted.

        Raises:
            NoRepositoriesFoundError: If none were found.
        """
        return RepositoryScanner(self.hidden).scan(path)

    def clone_repository(
        self,
        url: str,
        directory: PathLike,
        options: Optional[Options] = None,
        args: Optional[Sequence[str]] = None,
    ) -> Repository:
        """Clone ``url`` into ``directory``.

        The clone runs from the current working directory, since the target
        usually does not exist yet; a relative ``directory`` is resolved
        against it the same way git would.

        Raises:
            CommandFailedError: If ``git clone`` fails. Whatever git left on
                disk is not cleaned up.
        """
        repository = Repository(directory, self)
        clone_args = [url, repository.path, *(args or [])]
        logger.info("Cloning %s into %s", url, repository.path)
        self.run(repository, "clone", options, clone_args, cwd=os.getcwd())
        return repository

    def run(
        self,
        repository: Repository,
        command: str,
        options: Optional[Options] = None,
        args: Optional[Sequence[str]] = None,
        cwd: Optional[PathLike] = None,
    ) -> str:
        """Run a git command in ``repository`` and return its output.

        Args:
            repository: Repository whose path is the working directory.
            command: Git verb.
            options: Ordered option names to values, ``None`` for bare flags.
            args: Positional arguments.
            cwd: Working directory override.

        Raises:
            CommandFailedError: If git exits with a non-zero status.
            CommandTimeoutError: If git outlives the runner's timeout.
        """
        config = self._config
        prepared = CommandBuilder(config.path).build(command, options, args)
        return self.runner.run(prepared, cwd if cwd is not None else repository.path, config.env)
