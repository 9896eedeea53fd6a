"""
Core interfaces for ymake.

The build engine never spawns processes itself. It hands literal command
lines to a ProcessExecutor, which lets tests substitute a recording fake and
lets dry runs skip execution entirely.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a single command."""

    exit_code: int
    stdout: bytes = b""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessExecutor(ABC):
    """
    Abstract interface for running shell command lines.

    Implementations are used both for build commands (output goes straight to
    the terminal) and for $(shell ...) expansion (stdout is captured).
    """

    @abstractmethod
    def execute(
        self, command: str, cwd: Union[str, Path], capture_output: bool = False
    ) -> ProcessResult:
        """
        Run a command line to completion.

        Args:
            command: Fully expanded command line
            cwd: Working directory for the command
            capture_output: If True, collect stdout into the result

        Returns:
            ProcessResult with exit code and captured stdout

        Raises:
            ProcessLaunchError: If the command cannot be started at all
        """
        pass


__all__ = [
    "ProcessResult",
    "ProcessExecutor",
]
