"""
Make-style variable expansion.

Recognized references, resolved left to right in a single pass:

    $@              name of the current target
    $^              all dependencies, space separated
    $<              first dependency (empty when there is none)
    $$              a literal '$'
    $(NAME)         global variable (recursively expanded), else environment
                    variable, else empty string
    $(shell CMD)    standard output of CMD, after CMD itself is expanded

Any other '$' is left untouched so the shell still sees things like $HOME.
Expansion is a pure function of the context: the global variable table is
never written to, so values may reference variables declared later in the
file.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from ymake.config.parser import Target, Variable
from ymake.core.exceptions import ExpansionCycle, UnsupportedFunction
from ymake.core.interfaces import ProcessExecutor
from ymake.core.process import SubprocessExecutor

logger = logging.getLogger(__name__)

MAX_EXPANSION_DEPTH = 32

SHELL_FUNCTION = "shell"


@dataclass(frozen=True)
class ExpansionContext:
    """Per-target data used while expanding that target's commands."""

    target: Target
    variables: Mapping[str, Variable]
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    executor: Optional[ProcessExecutor] = None
    cwd: Union[str, Path] = "."

    @property
    def all_deps(self) -> str:
        return " ".join(self.target.deps)

    @property
    def first_dep(self) -> str:
        return self.target.deps[0] if self.target.deps else ""


def expand(raw: str, ctx: ExpansionContext) -> str:
    """
    Expand every recognized reference in a string.

    Args:
        raw: Text possibly containing Make-style references
        ctx: Expansion context of the target being built

    Returns:
        Fully substituted text

    Raises:
        ExpansionCycle: If a variable refers back to itself or nesting
            exceeds MAX_EXPANSION_DEPTH
        UnsupportedFunction: If a $(function ...) other than shell is used
    """
    return _expand(raw, ctx, ())


def _expand(raw: str, ctx: ExpansionContext, chain: Tuple[str, ...]) -> str:
    if "$" not in raw:
        return raw

    out = []
    pos = 0
    length = len(raw)

    while pos < length:
        dollar = raw.find("$", pos)
        if dollar < 0:
            out.append(raw[pos:])
            break

        out.append(raw[pos:dollar])
        nxt = raw[dollar + 1] if dollar + 1 < length else ""

        if nxt == "@":
            out.append(ctx.target.name)
        elif nxt == "^":
            out.append(ctx.all_deps)
        elif nxt == "<":
            out.append(ctx.first_dep)
        elif nxt == "$":
            out.append("$")
        elif nxt == "(":
            close = _find_closing_paren(raw, dollar + 2)
            if close < 0:
                logger.warning(f"Unterminated variable reference, keeping as is: {raw[dollar:]}")
                out.append(raw[dollar:])
                break
            out.append(_expand_reference(raw[dollar + 2 : close], ctx, chain))
            pos = close + 1
            continue
        else:
            out.append("$")
            pos = dollar + 1
            continue

        pos = dollar + 2

    return "".join(out)


def _find_closing_paren(text: str, start: int) -> int:
    """Return the index of the ')' matching an already opened '(', or -1."""
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _expand_reference(inner: str, ctx: ExpansionContext, chain: Tuple[str, ...]) -> str:
    """Expand the body of a $(...) reference."""
    parts = inner.split(None, 1)
    if not parts:
        return ""

    if len(parts) == 2:
        function, argument = parts
        if function == SHELL_FUNCTION:
            return _run_shell(_expand(argument, ctx, chain), ctx)
        raise UnsupportedFunction(function)

    # Names may be computed, as in $($(ARCH)_FLAGS)
    name = _expand(parts[0], ctx, chain)
    return _lookup(name, ctx, chain)


def _lookup(name: str, ctx: ExpansionContext, chain: Tuple[str, ...]) -> str:
    """Resolve a variable name to its expanded value."""
    if name == "@":
        return ctx.target.name
    if name == "^":
        return ctx.all_deps
    if name == "<":
        return ctx.first_dep

    variable = ctx.variables.get(name)
    if variable is not None:
        if name in chain:
            raise ExpansionCycle(chain + (name,))
        if len(chain) >= MAX_EXPANSION_DEPTH:
            raise ExpansionCycle(
                chain + (name,),
                reason=f"expansion depth exceeded {MAX_EXPANSION_DEPTH}",
            )
        logger.debug(f"Expanding variable {name} with value: {variable.value}")
        value = _expand(variable.value, ctx, chain + (name,))
        logger.debug(f"Expanded variable {name}: {value}")
        return value

    if name in ctx.environ:
        logger.debug(f"Found variable {name} in environment")
        return ctx.environ[name]

    logger.warning(f"Variable {name} is not defined, expanding to empty string")
    return ""


def _run_shell(command: str, ctx: ExpansionContext) -> str:
    """Run a $(shell ...) command and return its output on a single line."""
    executor = ctx.executor if ctx.executor is not None else SubprocessExecutor()

    logger.debug(f"Running shell function: {command}")
    result = executor.execute(command, ctx.cwd, capture_output=True)
    if not result.ok:
        logger.warning(
            f"Shell function exited with code {result.exit_code}: {command}"
        )

    output = result.stdout.decode("utf-8", errors="replace")
    output = output.replace("\r\n", "\n").rstrip("\n")
    return output.replace("\n", " ")
