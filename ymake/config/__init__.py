"""Configuration module for ymake.

This module provides YAML parsing of YMakefile.yml into variables and targets.
"""

from ymake.config.parser import (
    DEFAULT_CONFIG_NAME,
    Variable,
    Target,
    BuildConfig,
    ConfigError,
    parse_config,
    load_config_data,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "Variable",
    "Target",
    "BuildConfig",
    "ConfigError",
    "parse_config",
    "load_config_data",
]
