"""
Subprocess-backed process executor.
"""

import logging
import subprocess
from pathlib import Path
from typing import Union

from ymake.core.exceptions import ProcessLaunchError
from ymake.core.interfaces import ProcessExecutor, ProcessResult

logger = logging.getLogger(__name__)


class SubprocessExecutor(ProcessExecutor):
    """Run command lines through the system shell."""

    def execute(
        self, command: str, cwd: Union[str, Path], capture_output: bool = False
    ) -> ProcessResult:
        logger.debug(f"Executing in {cwd}: {command}")

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=str(cwd),
                stdout=subprocess.PIPE if capture_output else None,
            )
        except OSError as e:
            raise ProcessLaunchError(command, str(e)) from e

        logger.debug(f"Exit code {result.returncode}: {command}")
        return ProcessResult(
            exit_code=result.returncode,
            stdout=result.stdout if capture_output and result.stdout else b"",
        )
