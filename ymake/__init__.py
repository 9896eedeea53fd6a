"""
ymake - a minimal Make-like build engine driven by YAML.
"""

from ymake.config import BuildConfig, Target, Variable, load_config_data, parse_config
from ymake.core import (
    YMakeError,
    ConfigError,
    MissingCommand,
    DuplicateName,
    UnknownTarget,
    DependencyCycle,
    ExpansionCycle,
    UnsupportedFunction,
    CommandFailed,
    ProcessExecutor,
    ProcessResult,
    SubprocessExecutor,
)
from ymake.engine import (
    BuildExecutor,
    BuildReport,
    ExpansionContext,
    build,
    expand,
    resolve_order,
)

__all__ = [
    "BuildConfig",
    "Target",
    "Variable",
    "load_config_data",
    "parse_config",
    "YMakeError",
    "ConfigError",
    "MissingCommand",
    "DuplicateName",
    "UnknownTarget",
    "DependencyCycle",
    "ExpansionCycle",
    "UnsupportedFunction",
    "CommandFailed",
    "ProcessExecutor",
    "ProcessResult",
    "SubprocessExecutor",
    "BuildExecutor",
    "BuildReport",
    "ExpansionContext",
    "build",
    "expand",
    "resolve_order",
]
