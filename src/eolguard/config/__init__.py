"""Configuration loading, schema, and defaults."""

from eolguard.config.loader import ConfigError, load_config
from eolguard.config.schema import EolGuardConfig

__all__ = [
    "ConfigError",
    "EolGuardConfig",
    "load_config",
]
