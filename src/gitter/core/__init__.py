"""Core functionality for gitter."""

from .client import Client
from .commands import CommandBuilder, PreparedCommand, build_command
from .config import ClientConfig
from .errors import (
    AccessDeniedError,
    AlreadyExistsError,
    CommandFailedError,
    CommandTimeoutError,
    ConfigError,
    ExecutableNotFoundError,
    GitterError,
    NoRepositoriesFoundError,
    NotFoundError,
)
from .process import ProcessResult, ProcessRunner
from .repository import Repository
from .scanner import RepositoryListing, RepositoryScanner

__all__ = [
    "AccessDeniedError",
    "AlreadyExistsError",
    "Client",
    "ClientConfig",
    "CommandBuilder",
    "CommandFailedError",
    "CommandTimeoutError",
    "ConfigError",
    "ExecutableNotFoundError",
    "GitterError",
    "NoRepositoriesFoundError",
    "NotFoundError",
    "PreparedCommand",
    "ProcessResult",
    "ProcessRunner",
    "Repository",
    "RepositoryListing",
    "RepositoryScanner",
    "build_command",
]
