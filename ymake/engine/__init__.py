"""
Build engine for ymake.

Resolution of target order, Make-style variable expansion and sequential
command execution.
"""

from typing import Optional

from ymake.config.parser import BuildConfig
from ymake.engine.expander import (
    MAX_EXPANSION_DEPTH,
    ExpansionContext,
    expand,
)
from ymake.engine.resolver import default_target, resolve_order
from ymake.engine.executor import BuildExecutor, BuildReport


def build(config: BuildConfig, target: Optional[str] = None, **options) -> BuildReport:
    """
    Resolve and build a target of a loaded configuration.

    Args:
        config: Loaded configuration
        target: Target to build, or None for the first declared target
        **options: Passed to BuildExecutor (executor, cwd, environ, dry_run)

    Returns:
        BuildReport of the run
    """
    order = resolve_order(target, config.targets)
    return BuildExecutor(config.targets, config.variables, **options).run(order)


__all__ = [
    "MAX_EXPANSION_DEPTH",
    "ExpansionContext",
    "expand",
    "default_target",
    "resolve_order",
    "BuildExecutor",
    "BuildReport",
    "build",
]
