"""Test configuration management."""

import tomllib
from pathlib import Path

import pytest

from beanwalk.config.config import (
    ARRAY_TYPECODE_DEFAULT,
    MAX_INDEX_DEFAULT,
    Config,
)


def _write(config_file: Path, content: str) -> None:
    config_file.parent.mkdir(parents=True, exist_ok=True)
    _ = config_file.write_text(content, encoding="utf-8")


def test_defaults_without_file(config_runtime_env: Path) -> None:
    """A missing file yields the built-in defaults and is never created."""

    config = Config.load()

    assert config.log_file is None
    assert config.log_level == "WARNING"
    assert config.array_typecode == ARRAY_TYPECODE_DEFAULT
    assert config.max_index == MAX_INDEX_DEFAULT
    assert not config_runtime_env.exists()


def test_load_beanwalk_table(config_runtime_env: Path) -> None:
    """Values under ``[beanwalk]`` override defaults; unknown keys are ignored."""

    _write(
        config_runtime_env,
        '[beanwalk]\nmax_index = 50\narray_typecode = "d"\n'
        'log_file = "logs/beanwalk.log"\nlog_level = "DEBUG"\nunknown = 1\n',
    )

    config = Config.load()

    assert config.max_index == 50
    assert config.array_typecode == "d"
    assert config.log_file == Path("logs/beanwalk.log")
    assert config.log_level == "DEBUG"


def test_load_flat_file(config_runtime_env: Path) -> None:
    """A file without the ``[beanwalk]`` table is read as a flat table."""

    _write(config_runtime_env, "max_index = 7\n")

    assert Config.load().max_index == 7


def test_blank_log_file_means_no_file(config_runtime_env: Path) -> None:
    _write(config_runtime_env, '[beanwalk]\nlog_file = "  "\n')

    assert Config.load().log_file is None


def test_malformed_file_raises(config_runtime_env: Path) -> None:
    _write(config_runtime_env, "[beanwalk\nmax_index = \n")

    with pytest.raises(tomllib.TOMLDecodeError):
        _ = Config.load()


def test_singleton_behavior(config_runtime_env: Path) -> None:
    """Repeated loads return the cached instance until reset."""

    first = Config.load()
    _write(config_runtime_env, "max_index = 3\n")

    assert Config.load() is first

    Config.reset()

    assert Config.load().max_index == 3


def test_environment_override(
    config_runtime_env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``BEANWALK_CONFIG`` points at a file outside the repository."""

    _ = config_runtime_env
    override = tmp_path / "elsewhere" / "custom.toml"
    _write(override, "[beanwalk]\narray_typecode = \"i\"\n")
    monkeypatch.setenv("BEANWALK_CONFIG", str(override))

    assert Config.load().array_typecode == "i"
