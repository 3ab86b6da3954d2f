"""Subprocess execution for prepared git commands."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .commands import PreparedCommand
from .errors import (
    CommandFailedError,
    CommandTimeoutError,
    ExecutableNotFoundError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 180

# Undecodable bytes in stdout survive as surrogates and can be re-encoded
# with the same handler.
STDOUT_ERRORS = "surrogateescape"
STDERR_ERRORS = "replace"


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a finished git process."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def successful(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Runs prepared commands and captures their output.

    Attributes:
        timeout (float): Seconds a command may run before it is killed.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the runner."""
        self.timeout = timeout

    def execute(
        self,
        prepared: PreparedCommand,
        cwd: Union[str, "os.PathLike[str]"],
        env: Optional[Mapping[str, str]] = None,
    ) -> ProcessResult:
        """Run a command and return its result without checking the exit status.

        Args:
            prepared: The command to run.
            cwd: Working directory for the process.
            env: Environment for the process. When non-empty it replaces the
                inherited environment entirely.

        Raises:
            CommandTimeoutError: If the process outlives the timeout.
            ExecutableNotFoundError: If the git executable cannot be started.
            NotFoundError: If the working directory does not exist.
        """
        workdir = os.fspath(cwd)
        logger.debug("Running %s in %s", prepared.command_line, workdir)
        try:
            result = subprocess.run(
                prepared.argv,
                cwd=workdir,
                env=dict(env) if env else None,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(self.timeout, prepared.command_line) from e
        except FileNotFoundError as e:
            if e.filename == prepared.executable:
                raise ExecutableNotFoundError(prepared.executable) from e
            if e.filename == workdir:
                message = f"Working directory does not exist: {workdir}"
                raise NotFoundError(workdir, message) from e
            raise

        logger.debug("Command exited with status %d", result.returncode)
        return ProcessResult(
            result.returncode,
            result.stdout.decode("utf-8", errors=STDOUT_ERRORS),
            result.stderr.decode("utf-8", errors=STDERR_ERRORS),
        )

    def run(
        self,
        prepared: PreparedCommand,
        cwd: Union[str, "os.PathLike[str]"],
        env: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Run a command and return its standard output verbatim.

        Raises:
            CommandFailedError: If the process exits with a non-zero status.
                The error message is the captured standard error.
            CommandTimeoutError: If the process outlives the timeout.
            ExecutableNotFoundError: If the git executable cannot be started.
            NotFoundError: If the working directory does not exist.
        """
        result = self.execute(prepared, cwd, env)
        if not result.successful:
            raise CommandFailedError(result.stderr, result.returncode, prepared.command_line)
        return result.stdout
