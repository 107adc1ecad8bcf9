"""Configuration loading and derived settings."""

from .config import Config, config
from .paths import default_config_path

__all__ = ["Config", "config", "default_config_path"]
