"""
Centralized exception hierarchy for ymake.

Every failure that aborts a build run derives from YMakeError, so the CLI
can report it uniformly and exit with a non-zero status.
"""

from typing import Iterable, List, Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class YMakeError(Exception):
    """Base exception for all ymake errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(YMakeError):
    """Configuration parsing or validation error."""

    pass


class MissingCommand(ConfigError):
    """Raised when a target entry has no commands."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Target '{target}' must have a cmd field with at least one command")


class DuplicateName(ConfigError):
    """Raised when two entries of the same mapping share a name."""

    def __init__(self, name: str, location: Optional[str] = None):
        self.name = name
        self.location = location
        message = f"Duplicate entry name: {name}"
        if location:
            message += f" ({location})"
        super().__init__(message)


# ============================================================================
# Resolution Exceptions
# ============================================================================


class ResolutionError(YMakeError):
    """Base exception for dependency resolution errors."""

    pass


class UnknownTarget(ResolutionError):
    """Raised when the requested target is not declared."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available: List[str] = list(available)
        msg = f"No rule to make target: {name}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class DependencyCycle(ResolutionError):
    """Raised when target dependencies form a cycle."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle: List[str] = list(cycle)
        super().__init__(f"Dependency cycle detected: {' -> '.join(self.cycle)}")


# ============================================================================
# Expansion Exceptions
# ============================================================================


class ExpansionError(YMakeError):
    """Base exception for variable expansion errors."""

    pass


class ExpansionCycle(ExpansionError):
    """Raised when variable expansion references itself or nests too deeply."""

    def __init__(self, chain: Sequence[str], reason: str = "recursive variable reference"):
        self.chain: List[str] = list(chain)
        super().__init__(f"{reason.capitalize()}: {' -> '.join(self.chain)}")


class UnsupportedFunction(ExpansionError):
    """Raised when a $(function ...) reference names an unknown function."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Function '{name}' is not supported")


# ============================================================================
# Execution Exceptions
# ============================================================================


class ExecutionError(YMakeError):
    """Base exception for command execution errors."""

    pass


class CommandFailed(ExecutionError):
    """Raised when a build command exits with a non-zero status."""

    def __init__(self, target: str, command: str, exit_code: int):
        self.target = target
        self.command = command
        self.exit_code = exit_code
        super().__init__(
            f"Command for target '{target}' failed with exit code {exit_code}: {command}"
        )


class ProcessLaunchError(ExecutionError):
    """Raised when the operating system cannot start a command."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot execute command '{command}': {reason}")
