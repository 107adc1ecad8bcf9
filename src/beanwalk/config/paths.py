"""Location of the optional beanwalk configuration file.

Lookup order:
- ``BEANWALK_CONFIG`` when set to a non-blank value.
- ``<repo_root>/config/beanwalk.toml`` otherwise.

The file is only ever read; nothing here creates it.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final


CONFIG_ENV_VAR: Final[str] = "BEANWALK_CONFIG"
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def resolve_overridable_path(
    *,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Pick the environment value when set, else the default.

    Args:
        env: Environment mapping. ``os.environ`` when None.
        env_var: Variable consulted in ``env``; blank values are ignored.
        default_factory: Produces the fallback location lazily.

    Returns:
        Path: Absolute, user-expanded location.
    """

    source = os.environ if env is None else env
    override = (source.get(env_var) or "").strip() if env_var else ""
    chosen = Path(override) if override else default_factory()
    return chosen.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor holding a project marker, else the cwd."""

    origin = (start or Path(__file__).resolve()).parent
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return where ``Config.load`` looks for ``beanwalk.toml``."""

    return resolve_overridable_path(
        env=env,
        env_var=CONFIG_ENV_VAR,
        default_factory=lambda: _detect_repo_root() / "config" / "beanwalk.toml",
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "default_config_path",
    "resolve_overridable_path",
]
