"""
Build execution.

Walks a resolved build order, expands each target's commands in that
target's context and hands them to the process executor one at a time.
The first failing command stops the whole run.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from ymake.config.parser import Target, Variable
from ymake.core.exceptions import CommandFailed
from ymake.core.interfaces import ProcessExecutor
from ymake.core.process import SubprocessExecutor
from ymake.engine.expander import ExpansionContext, expand

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Targets and commands handled by a build run."""

    targets: List[str] = field(default_factory=list)
    commands: List[Tuple[str, str]] = field(default_factory=list)
    dry_run: bool = False

    def add_command(self, target: str, command: str):
        self.commands.append((target, command))


class BuildExecutor:
    """Run target commands in dependency order."""

    def __init__(
        self,
        targets: Mapping[str, Target],
        variables: Mapping[str, Variable],
        executor: Optional[ProcessExecutor] = None,
        cwd: Union[str, Path] = ".",
        environ: Optional[Mapping[str, str]] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the build executor.

        Args:
            targets: All declared targets
            variables: Global variable table (never modified)
            executor: Process executor, SubprocessExecutor by default
            cwd: Working directory for every command
            environ: Environment used for variable fallback, os.environ by default
            dry_run: If True, print expanded commands instead of running them
        """
        self.targets = targets
        self.variables = variables
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.cwd = Path(cwd)
        self.environ = environ if environ is not None else os.environ
        self.dry_run = dry_run

    def context_for(self, target: Target) -> ExpansionContext:
        """Create the expansion context of a target."""
        return ExpansionContext(
            target=target,
            variables=self.variables,
            environ=self.environ,
            executor=self.executor,
            cwd=self.cwd,
        )

    def run(self, order: Sequence[str]) -> BuildReport:
        """
        Build targets in the given order.

        Args:
            order: Target names, dependencies first

        Returns:
            BuildReport listing the targets and commands handled

        Raises:
            CommandFailed: On the first command with a non-zero exit status
            KeyError: If a name in order is not a declared target
        """
        report = BuildReport(dry_run=self.dry_run)

        for name in order:
            target = self.targets[name]
            ctx = self.context_for(target)
            logger.debug(f"Building target: {name}")

            for raw in target.cmds:
                logger.debug(f"Expanding command: {raw}")
                command = expand(raw, ctx)
                report.add_command(name, command)

                if self.dry_run:
                    print(command)
                    continue

                logger.info(f"[{name}] {command}")
                result = self.executor.execute(command, self.cwd)
                if not result.ok:
                    raise CommandFailed(name, command, result.exit_code)

            report.targets.append(name)

        return report
