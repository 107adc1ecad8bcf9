"""Configuration management for beanwalk."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from beanwalk.config.paths import default_config_path

ARRAY_TYPECODE_DEFAULT: str = "q"
MAX_INDEX_DEFAULT: int = 100_000
LOG_LEVEL_DEFAULT: str = "WARNING"

_log = logging.getLogger("beanwalk.config")


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Library configuration."""

    # Optional rotating log file
    log_file: Path | None = _path_field()

    # Console log level name
    log_level: str = LOG_LEVEL_DEFAULT

    # Typecode for arrays created without an Annotated[array, "<code>"] hint
    array_typecode: str = ARRAY_TYPECODE_DEFAULT

    # Largest list/array index the mutator will grow to
    max_index: int = MAX_INDEX_DEFAULT

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "Config":
        """Build a configuration from parsed TOML, ignoring unknown keys.

        Args:
            values: Parsed TOML table.

        Returns:
            Config: Configuration with defaults for absent keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            _log.debug("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in values.items() if key in known})

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, falling back to defaults when absent.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                _log.error("Failed to load configuration from %s: %s", config_file, e)
                raise

            # The [beanwalk] table is optional; a flat file works too
            table = config_dict.get("beanwalk", config_dict)
            instance = cls.from_mapping(table)
            _log.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            _log.debug("No configuration at %s, using defaults", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next ``load`` re-reads the file."""
        cls._instance = None
        cls._loaded_from = None


# Global configuration instance
config = Config.load()
