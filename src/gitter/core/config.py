"""Configuration management for gitter.

A client is configured with three settings:

- ``path``: the git executable (defaults to the first ``git`` on ``PATH``)
- ``hidden``: repository paths that are neither listed nor opened
- ``env``: environment handed to every git process, replacing the
  inherited one when non-empty

Settings come from a mapping or a YAML file:

    ```yaml
    path: /usr/local/bin/git
    hidden:
      - /srv/git/private
    env:
      GIT_SSH_COMMAND: ssh -i ~/.ssh/deploy
    ```
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .errors import ConfigError

FALLBACK_GIT_PATH = "/usr/bin/git"

# Helper that prints $SSH_PASS for ssh's askpass mechanism.
ASKPASS_SCRIPT = Path(__file__).resolve().parent / "script" / "ssh-echopass"
ASKPASS_DISPLAY = "hack"
PASSPHRASE_KEYS = ("SSH_ASKPASS", "DISPLAY", "SSH_PASS")


def find_git() -> str:
    """Return the first git on PATH, or the conventional system location."""
    return shutil.which("git") or FALLBACK_GIT_PATH


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client settings.

    Attributes:
        path (str): Path to the git executable.
        hidden (Tuple[str, ...]): Repository paths excluded from listing
            and opening. Compared by exact string match.
        env (Optional[Mapping[str, str]]): Environment for git processes.
            Stored as a read-only copy.
    """

    path: str = field(default_factory=find_git)
    hidden: Tuple[str, ...] = ()
    env: Optional[Mapping[str, str]] = field(default=None, hash=False)

    def __post_init__(self) -> None:
        env = MappingProxyType(dict(self.env)) if self.env else None
        object.__setattr__(self, "env", env)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ClientConfig":
        """Build a configuration from a ``{path, hidden, env}`` mapping.

        Raises:
            ConfigError: If the mapping has values of the wrong type.
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise ConfigError("Configuration must be a dictionary")

        path = options.get("path")
        if path is None:
            path = find_git()
        elif not isinstance(path, (str, Path)):
            raise ConfigError("path must be a string")

        hidden = options.get("hidden") or []
        if not isinstance(hidden, (list, tuple, set, frozenset)):
            raise ConfigError("hidden must be a list")
        for hidden_path in hidden:
            if not isinstance(hidden_path, (str, Path)):
                raise ConfigError(f"hidden path {hidden_path!r} must be a string")

        env = options.get("env") or None
        if env is not None:
            if not isinstance(env, Mapping):
                raise ConfigError("env must be a dictionary")
            for key, value in env.items():
                if not isinstance(key, str) or not isinstance(value, str):
                    raise ConfigError(f"env entry {key!r} must map a string to a string")
            env = dict(env)

        return cls(
            path=str(path),
            hidden=tuple(str(hidden_path) for hidden_path in hidden),
            env=env,
        )

    @classmethod
    def load(cls, config_file: Union[str, Path]) -> "ClientConfig":
        """Load a configuration from a YAML file.

        An empty file yields the defaults.

        Raises:
            ConfigError: If the file cannot be read or parsed, or is invalid.
        """
        config_path = Path(config_file).expanduser()
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Error loading config file {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing config file {config_path}: {e}") from e

        return cls.from_options(data or {})

    def with_env(self, env: Optional[Mapping[str, str]]) -> "ClientConfig":
        """Return a copy with ``env`` as the process environment."""
        return replace(self, env=dict(env) if env else None)

    def with_passphrase(self, passphrase: Optional[str]) -> "ClientConfig":
        """Return a copy set up to answer ssh passphrase prompts.

        With a passphrase, ``SSH_ASKPASS``, ``DISPLAY`` and ``SSH_PASS`` are
        added to the environment. With ``None`` those three keys are removed.
        """
        env = dict(self.env or {})
        if passphrase is None:
            for key in PASSPHRASE_KEYS:
                env.pop(key, None)
        else:
            env["SSH_ASKPASS"] = str(ASKPASS_SCRIPT)
            env["DISPLAY"] = ASKPASS_DISPLAY
            env["SSH_PASS"] = passphrase
        return self.with_env(env)
