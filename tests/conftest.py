"""Test configuration."""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest

from gitter.core.client import Client

# Prints each argument on its own line.
ECHO_ARGS_SCRIPT = """\
for arg in "$@"; do
    printf '%s\\n' "$arg"
done
"""

# Prints the variables a passphrase change touches, plus one that is
# normally inherited from the parent process.
ECHO_ENV_SCRIPT = """\
printf 'SSH_ASKPASS=%s\\n' "${SSH_ASKPASS-unset}"
printf 'DISPLAY=%s\\n' "${DISPLAY-unset}"
printf 'SSH_PASS=%s\\n' "${SSH_PASS-unset}"
printf 'EXTRA=%s\\n' "${EXTRA-unset}"
printf 'GITTER_TEST_INHERITED=%s\\n' "${GITTER_TEST_INHERITED-unset}"
"""


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a factory that writes executable shell scripts."""

    def _make_script(name: str, body: str) -> Path:
        script = tmp_path / "bin" / name
        script.parent.mkdir(exist_ok=True)
        script.write_text("#!/bin/sh\n" + body)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make_script


@pytest.fixture
def echo_git(make_script: Callable[[str, str], Path]) -> Path:
    """A fake git that prints its arguments."""
    return make_script("echo-git", ECHO_ARGS_SCRIPT)


@pytest.fixture
def env_git(make_script: Callable[[str, str], Path]) -> Path:
    """A fake git that prints part of its environment."""
    return make_script("env-git", ECHO_ENV_SCRIPT)


@pytest.fixture
def failing_git(make_script: Callable[[str, str], Path]) -> Path:
    """A fake git that fails with a message on stderr."""
    return make_script("failing-git", "echo 'partial output'\necho 'fatal: error' >&2\nexit 1\n")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A directory tree holding a working copy, a bare repository and a hidden one."""
    root = tmp_path / "root"
    (root / "a" / ".git").mkdir(parents=True)
    (root / "a" / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "b").mkdir()
    (root / "b" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "HEAD").write_text("ref: refs/heads/main\n")
    return root


@pytest.fixture
def client() -> Client:
    """Create a client using the git found on PATH."""
    return Client()
