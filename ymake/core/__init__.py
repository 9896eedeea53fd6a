"""
Core functionality for ymake.

This package contains the error hierarchy and the process-execution
collaborator that the build engine depends on.
"""

from .exceptions import (
    YMakeError,
    ConfigError,
    MissingCommand,
    DuplicateName,
    ResolutionError,
    UnknownTarget,
    DependencyCycle,
    ExpansionError,
    ExpansionCycle,
    UnsupportedFunction,
    ExecutionError,
    CommandFailed,
    ProcessLaunchError,
)

from .interfaces import (
    ProcessResult,
    ProcessExecutor,
)

from .process import SubprocessExecutor

__all__ = [
    "YMakeError",
    "ConfigError",
    "MissingCommand",
    "DuplicateName",
    "ResolutionError",
    "UnknownTarget",
    "DependencyCycle",
    "ExpansionError",
    "ExpansionCycle",
    "UnsupportedFunction",
    "ExecutionError",
    "CommandFailed",
    "ProcessLaunchError",
    "ProcessResult",
    "ProcessExecutor",
    "SubprocessExecutor",
]
