"""
Dependency resolution.

Turns a requested target into the ordered list of targets to build, with
every dependency listed before the targets that need it.
"""

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ymake.config.parser import Target
from ymake.core.exceptions import DependencyCycle, UnknownTarget

logger = logging.getLogger(__name__)


def default_target(targets: Mapping[str, Target]) -> Optional[str]:
    """Return the first declared target, or None if there are none."""
    return next(iter(targets), None)


def resolve_order(
    requested: Optional[str], targets: Mapping[str, Target]
) -> List[str]:
    """
    Compute the build order for a target.

    Dependencies that are not target names are treated as existing files and
    left out of the result. Each target appears at most once, so shared
    dependencies are built a single time.

    Args:
        requested: Target to build, or None for the first declared target
        targets: All declared targets, in declaration order

    Returns:
        Target names in build order, ending with the requested target

    Raises:
        UnknownTarget: If the requested target is not declared
        DependencyCycle: If the dependency graph contains a cycle
    """
    if requested is None:
        requested = default_target(targets)
        if requested is None:
            raise UnknownTarget("<default>")
        logger.debug(f"No target given, using first declared target: {requested}")

    if requested not in targets:
        raise UnknownTarget(requested, targets.keys())

    order: List[str] = []
    done = set()
    # Insertion-ordered, so its keys are the current path
    in_progress: Dict[str, None] = {requested: None}
    # Pending (target, remaining deps) pairs
    stack: List[Tuple[str, Iterator[str]]] = [
        (requested, iter(targets[requested].deps))
    ]

    while stack:
        name, deps = stack[-1]
        for dep in deps:
            if dep not in targets:
                logger.debug(f"Treating '{dep}' as an existing file (needed by {name})")
                continue
            if dep in done:
                continue
            if dep in in_progress:
                path = list(in_progress)
                raise DependencyCycle(path[path.index(dep) :] + [dep])

            in_progress[dep] = None
            stack.append((dep, iter(targets[dep].deps)))
            break
        else:
            stack.pop()
            del in_progress[name]
            done.add(name)
            order.append(name)

    logger.debug(f"Build order for {requested}: {order}")
    return order
