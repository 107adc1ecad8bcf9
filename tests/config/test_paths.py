"""Tests for configuration path resolution helpers."""

from pathlib import Path

from beanwalk.config.paths import default_config_path, resolve_overridable_path


def test_default_config_path(portable_repo_root: Path) -> None:
    """The default config file lives under the repository config/ folder."""

    assert default_config_path() == portable_repo_root / "config" / "beanwalk.toml"


def test_environment_mapping_overrides_default(
    portable_repo_root: Path, tmp_path: Path
) -> None:
    _ = portable_repo_root
    target = tmp_path / "other.toml"

    assert default_config_path({"BEANWALK_CONFIG": str(target)}) == target.resolve()


def test_blank_environment_value_is_ignored(portable_repo_root: Path) -> None:
    resolved = default_config_path({"BEANWALK_CONFIG": "   "})

    assert resolved == portable_repo_root / "config" / "beanwalk.toml"


def test_default_factory_is_only_called_without_override(tmp_path: Path) -> None:
    """An environment override short-circuits the default location."""

    calls: list[str] = []

    def default() -> Path:
        calls.append("default")
        return tmp_path / "default.toml"

    resolved = resolve_overridable_path(
        env={"BEANWALK_CONFIG": str(tmp_path / "env.toml")},
        env_var="BEANWALK_CONFIG",
        default_factory=default,
    )

    assert resolved == (tmp_path / "env.toml").resolve()
    assert calls == []


def test_missing_env_var_name_uses_default(tmp_path: Path) -> None:
    resolved = resolve_overridable_path(
        env={"BEANWALK_CONFIG": str(tmp_path / "env.toml")},
        env_var=None,
        default_factory=lambda: tmp_path / "default.toml",
    )

    assert resolved == (tmp_path / "default.toml").resolve()
