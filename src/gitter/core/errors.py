"""Exceptions raised by gitter."""

from __future__ import annotations

from typing import Optional


class GitterError(RuntimeError):
    """Base class for all gitter errors."""


class ConfigError(GitterError):
    """Raised when client configuration is malformed."""


class AlreadyExistsError(GitterError):
    """Raised when a repository already exists at a creation target."""

    def __init__(self, path: str) -> None:
        super().__init__(f"A GIT repository already exists at {path}")
        self.path = path


class NotFoundError(GitterError):
    """Raised when a path holds no repository."""

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"There is no GIT repository at {path}")
        self.path = path


class AccessDeniedError(GitterError):
    """Raised when a repository is on the hidden list."""

    def __init__(self, path: str) -> None:
        super().__init__("You don't have access to this repository")
        self.path = path


class NoRepositoriesFoundError(GitterError):
    """Raised when a scan finds nothing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"There are no GIT repositories in {path}")
        self.path = path


class CommandFailedError(GitterError):
    """Raised when git exits with a non-zero status."""

    def __init__(self, stderr: str, returncode: int, command: str = "") -> None:
        super().__init__(stderr)
        self.stderr = stderr
        self.returncode = returncode
        self.command = command


class CommandTimeoutError(GitterError):
    """Raised when git runs longer than the allowed timeout."""

    def __init__(self, timeout: float, command: str = "") -> None:
        super().__init__(f"Git command timed out after {timeout:g} seconds: {command}")
        self.timeout = timeout
        self.command = command


class ExecutableNotFoundError(GitterError):
    """Raised when the configured git executable cannot be started."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Git executable not found: {executable}")
        self.executable = executable
