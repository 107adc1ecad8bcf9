"""Where: src/beanwalk/config/settings.py
What: Derived runtime settings sourced from the loaded configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Invalid values silently fall back to defaults instead of failing import.
"""

from __future__ import annotations

import logging
from array import typecodes
from pathlib import Path

from beanwalk.config.config import (
    ARRAY_TYPECODE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    MAX_INDEX_DEFAULT,
    config as app_config,
)

# Logging ---------------------------------------------------------------------

LOG_FILE: Path | None = app_config.log_file

_level_name = str(getattr(app_config, "log_level", LOG_LEVEL_DEFAULT)).upper()
_level = logging.getLevelName(_level_name)
LOG_LEVEL: int = _level if isinstance(_level, int) else logging.getLevelName(LOG_LEVEL_DEFAULT)


# Auto-vivification -----------------------------------------------------------

_typecode = getattr(app_config, "array_typecode", ARRAY_TYPECODE_DEFAULT)
ARRAY_TYPECODE: str = _typecode if _typecode in typecodes else ARRAY_TYPECODE_DEFAULT

_max_index = getattr(app_config, "max_index", MAX_INDEX_DEFAULT)
MAX_INDEX: int = (
    _max_index
    if isinstance(_max_index, int) and not isinstance(_max_index, bool) and _max_index >= 0
    else MAX_INDEX_DEFAULT
)


__all__ = [
    "ARRAY_TYPECODE",
    "LOG_FILE",
    "LOG_LEVEL",
    "MAX_INDEX",
]
