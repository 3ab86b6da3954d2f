"""Tests for configuration management."""

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Dict

import pytest
import yaml

from gitter.core.config import ASKPASS_SCRIPT, ClientConfig, find_git
from gitter.core.errors import ConfigError


def create_temp_config(config_data: Dict[str, Any]) -> Path:
    """Create a temporary config file."""
    temp_file = NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    with temp_file:
        yaml.safe_dump(config_data, temp_file, encoding="utf-8")
    return Path(temp_file.name)


def test_default_config() -> None:
    """Test default configuration."""
    config = ClientConfig()
    assert config.path == find_git()
    assert config.hidden == ()
    assert config.env is None


def test_from_options() -> None:
    """Test building a configuration from a mapping."""
    config = ClientConfig.from_options(
        {"path": "/opt/git", "hidden": ["/srv/private"], "env": {"HOME": "/tmp"}}
    )
    assert config.path == "/opt/git"
    assert config.hidden == ("/srv/private",)
    assert config.env == {"HOME": "/tmp"}


def test_from_options_defaults_path() -> None:
    """Test a missing path falls back to the git on PATH."""
    assert ClientConfig.from_options({"hidden": []}).path == find_git()
    assert ClientConfig.from_options(None) == ClientConfig()


def test_empty_env_means_inherit() -> None:
    """Test an empty env mapping is treated as no override."""
    assert ClientConfig.from_options({"env": {}}).env is None


@pytest.mark.parametrize(
    "options",
    [
        ["not", "a", "mapping"],
        {"path": 42},
        {"hidden": "/srv/private"},
        {"hidden": [1]},
        {"env": ["A=1"]},
        {"env": {"A": 1}},
    ],
)
def test_invalid_options(options: Any) -> None:
    """Test malformed settings are rejected."""
    with pytest.raises(ConfigError):
        ClientConfig.from_options(options)


def test_load_config_file() -> None:
    """Test loading configuration from file."""
    config_path = create_temp_config(
        {"path": "/usr/local/bin/git", "hidden": ["/srv/git/private"], "env": {"LANG": "C"}}
    )
    try:
        config = ClientConfig.load(config_path)
        assert config.path == "/usr/local/bin/git"
        assert config.hidden == ("/srv/git/private",)
        assert config.env == {"LANG": "C"}
    finally:
        config_path.unlink()


def test_load_empty_config_file(tmp_path: Path) -> None:
    """Test an empty file gives the defaults."""
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert ClientConfig.load(config_path) == ClientConfig()


def test_load_missing_config_file(tmp_path: Path) -> None:
    """Test a missing file raises a configuration error."""
    with pytest.raises(ConfigError):
        ClientConfig.load(tmp_path / "missing.yaml")


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """Test unparsable YAML raises a configuration error."""
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("hidden: [unclosed\n")
    with pytest.raises(ConfigError):
        ClientConfig.load(config_path)


def test_with_passphrase_sets_and_clears() -> None:
    """Test the passphrase helper variables are toggled together."""
    config = ClientConfig(path="git", env={"LANG": "C"})

    with_pass = config.with_passphrase("secret")
    assert with_pass.env == {
        "LANG": "C",
        "SSH_ASKPASS": str(ASKPASS_SCRIPT),
        "DISPLAY": "hack",
        "SSH_PASS": "secret",
    }
    assert config.env == {"LANG": "C"}

    cleared = with_pass.with_passphrase(None)
    assert cleared.env == {"LANG": "C"}


def test_clearing_last_entries_inherits_again() -> None:
    """Test clearing the passphrase from an otherwise empty env drops the override."""
    config = ClientConfig(path="git").with_passphrase("secret").with_passphrase(None)
    assert config.env is None


def test_askpass_script_is_bundled() -> None:
    """Test the askpass helper ships with the package."""
    assert ASKPASS_SCRIPT.is_file()
    assert "SSH_PASS" in ASKPASS_SCRIPT.read_text()


def test_env_is_read_only() -> None:
    """Test the stored environment cannot be changed in place."""
    config = ClientConfig(path="git", env={"LANG": "C"})
    with pytest.raises(TypeError):
        config.env["LANG"] = "en_US.UTF-8"  # type: ignore[index]
    assert config.env == {"LANG": "C"}


def test_env_is_copied_from_caller() -> None:
    """Test later changes to the caller's dict do not leak into the config."""
    env = {"LANG": "C"}
    config = ClientConfig(path="git", env=env)
    env["LANG"] = "en_US.UTF-8"
    assert config.env == {"LANG": "C"}


def test_config_is_hashable() -> None:
    """Test configs with an environment can be hashed and compared."""
    config = ClientConfig(path="git", hidden=("/srv/private",), env={"A": "1"})
    same = ClientConfig(path="git", hidden=("/srv/private",), env={"A": "1"})
    assert hash(config) == hash(same)
    assert config == same
    assert config != same.with_env({"A": "2"})
    assert len({config, same}) == 1
