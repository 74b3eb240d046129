"""Unit tests for selffork.config."""

import pickle

import pytest
from pydantic import ValidationError

from selffork.config import config_path, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "SELFFORK_CONFIG",
        "SELFFORK_TEMP_DIR",
        "SELFFORK_TEMP_PREFIX",
        "SELFFORK_PICKLE_PROTOCOL",
        "SELFFORK_STRICT",
    ):
        monkeypatch.delenv(var, raising=False)


def test_defaults_when_file_missing(tmp_path) -> None:
    config = load_config(tmp_path / "missing.toml")

    assert config.temp_dir is None
    assert config.temp_prefix == "selffork_"
    assert config.pickle_protocol == pickle.HIGHEST_PROTOCOL
    assert config.strict is False


def test_file_values_are_loaded(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[selffork]\ntemp_dir = "/var/tmp"\nstrict = true\n', encoding="utf-8")

    config = load_config(path)

    assert config.temp_dir == "/var/tmp"
    assert config.strict is True


def test_environment_wins_over_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text('temp_prefix = "file_"\npickle_protocol = 2\n', encoding="utf-8")
    monkeypatch.setenv("SELFFORK_TEMP_PREFIX", "env_")
    monkeypatch.setenv("SELFFORK_STRICT", "true")

    config = load_config(path)

    assert config.temp_prefix == "env_"
    assert config.pickle_protocol == 2
    assert config.strict is True


def test_invalid_value_raises_validation_error(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SELFFORK_PICKLE_PROTOCOL", "99")
    with pytest.raises(ValidationError):
        load_config(tmp_path / "missing.toml")


def test_config_path_honors_override(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SELFFORK_CONFIG", str(tmp_path / "custom.toml"))
    assert config_path() == tmp_path / "custom.toml"
