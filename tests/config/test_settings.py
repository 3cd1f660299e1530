"""Tests for client configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from mbrainz.config import (
    DEFAULT_BASE_URL,
    ClientConfig,
    ExecutionMode,
    load_config,
)
from mbrainz.errors import ConfigurationError


def test_defaults_target_public_server() -> None:
    config = ClientConfig()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.rate_limit_interval == 1.0
    assert config.max_retries == 5
    assert config.mode is ExecutionMode.BLOCKING
    assert config.timeout == (5.0, 15.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_url": "ftp://example.com"},
        {"rate_limit_interval": 0},
        {"rate_limit_burst": 0},
        {"read_timeout": -1},
        {"max_retries": -1},
        {"default_backoff": 10.0, "max_backoff": 1.0},
    ],
)
def test_invalid_values_raise(overrides: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        _ = ClientConfig.from_mapping(overrides)


def test_from_mapping_coerces_strings() -> None:
    config = ClientConfig.from_mapping(
        {
            "rate_limit_interval": "2.5",
            "rate_limit_burst": "3",
            "legacy_serialize": "yes",
            "mode": "ASYNC",
        }
    )

    assert config.rate_limit_interval == 2.5
    assert config.rate_limit_burst == 3
    assert config.legacy_serialize is True
    assert config.mode is ExecutionMode.ASYNC


@pytest.mark.parametrize(
    ("key", "value"),
    [("mode", "threaded"), ("legacy_serialize", "maybe"), ("max_retries", "many"), ("burst", 1)],
)
def test_from_mapping_rejects_bad_entries(key: str, value: object) -> None:
    with pytest.raises(ConfigurationError):
        _ = ClientConfig.from_mapping({key: value})


def test_with_overrides_returns_new_config() -> None:
    base = ClientConfig()
    changed = base.with_overrides(max_retries="1")

    assert base.max_retries == 5
    assert changed.max_retries == 1


def test_load_config_without_file_uses_defaults(portable_repo_root: Path) -> None:
    _ = portable_repo_root

    assert load_config(env={}) == ClientConfig()


def test_load_config_reads_default_toml(portable_repo_root: Path) -> None:
    config_dir = portable_repo_root / "config"
    config_dir.mkdir()
    _ = (config_dir / "mbrainz.toml").write_text(
        '[mbrainz]\nbase_url = "http://localhost:5000/ws/2"\nrate_limit_interval = 0.5\n',
        encoding="utf-8",
    )

    config = load_config(env={})

    assert config.base_url == "http://localhost:5000/ws/2"
    assert config.rate_limit_interval == 0.5


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    _ = path.write_text('user_agent = "file/1"\nmode = "blocking"\n', encoding="utf-8")

    config = load_config(
        path,
        env={
            "MBRAINZ_USER_AGENT": "env/2",
            "MBRAINZ_MODE": "async",
            "MBRAINZ_LEGACY_SERIALIZE": "1",
            "MBRAINZ_RATE_LIMIT_INTERVAL": "1.5",
            "MBRAINZ_BASE_URL": "http://mock.local/ws/2",
        },
    )

    assert config.user_agent == "env/2"
    assert config.mode is ExecutionMode.ASYNC
    assert config.legacy_serialize is True
    assert config.rate_limit_interval == 1.5
    assert config.base_url == "http://mock.local/ws/2"


def test_keyword_overrides_win(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    _ = path.write_text("max_retries = 2\n", encoding="utf-8")

    config = load_config(path, env={"MBRAINZ_MAX_RETRIES": "3"}, max_retries=4)

    assert config.max_retries == 4


def test_config_path_from_environment(tmp_path: Path) -> None:
    path = tmp_path / "elsewhere.toml"
    _ = path.write_text("read_timeout = 30\n", encoding="utf-8")

    config = load_config(env={"MBRAINZ_CONFIG": str(path)})

    assert config.read_timeout == 30.0


def test_missing_explicit_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        _ = load_config(tmp_path / "absent.toml", env={})


def test_malformed_toml_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    _ = path.write_text("base_url = \n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Failed to read"):
        _ = load_config(path, env={})


def test_unknown_key_in_file_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "typo.toml"
    _ = path.write_text("rate_limit_intreval = 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="rate_limit_intreval"):
        _ = load_config(path, env={})
