"""YAML configuration parser for ymake.

This module loads YMakefile.yml files and classifies their top-level entries
into global variables and build targets. Values are stored raw: variable
references are only expanded at build time.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

from ymake.core.exceptions import ConfigError, DuplicateName, MissingCommand

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "YMakefile.yml"

TARGET_KEYS = ("dep", "cmd")


@dataclass(frozen=True)
class Variable:
    """A global variable with its raw, unexpanded value."""

    name: str
    value: str


@dataclass(frozen=True)
class Target:
    """A named build unit."""

    name: str
    deps: Tuple[str, ...] = ()
    cmds: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildConfig:
    """Complete ymake configuration."""

    variables: Mapping[str, Variable] = field(
        default_factory=lambda: MappingProxyType({})
    )
    targets: Mapping[str, Target] = field(default_factory=lambda: MappingProxyType({}))
    source: Optional[Path] = None

    @property
    def default_target(self) -> Optional[str]:
        """Name of the first declared target."""
        return next(iter(self.targets), None)


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate mapping keys instead of overwriting."""

    def __init__(self, stream):
        super().__init__(stream)
        # id(mapping node) -> key it is the value of
        self._owners: Dict[int, str] = {}

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            owner = self._owners.pop(id(node), None)
            seen = set()
            for key_node, value_node in node.value:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    continue
                if key in seen:
                    raise DuplicateName(str(key), _describe_location(key_node, owner))
                seen.add(key)
                if isinstance(value_node, yaml.MappingNode) and isinstance(key, str):
                    self._owners[id(value_node)] = key
        return super().construct_mapping(node, deep=deep)


def _describe_location(node: yaml.Node, owner: Optional[str]) -> str:
    mark = node.start_mark
    location = f"line {mark.line + 1}, column {mark.column + 1}"
    if owner:
        location = f"under '{owner}', {location}"
    return location


def parse_config(config_path: Union[str, Path]) -> BuildConfig:
    """
    Parse a YMakefile.yml configuration file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError(f"Configuration file is empty: {config_path}")

    return load_config_data(data, source=config_path)


def load_config_data(data: Any, source: Optional[Path] = None) -> BuildConfig:
    """
    Build the configuration model from an already parsed mapping.

    Plain scalars become variables, mappings become targets.

    Args:
        data: Top-level mapping of the configuration document
        source: Optional path the data was read from

    Returns:
        BuildConfig with read-only variable and target tables
    """
    if not isinstance(data, Mapping):
        raise ConfigError(
            f"Configuration must be a mapping of variables and targets, got {type(data).__name__}"
        )

    variables: Dict[str, Variable] = {}
    targets: Dict[str, Target] = {}

    for name, value in data.items():
        if not isinstance(name, str) or not name:
            raise ConfigError(f"Entry names must be non-empty strings, got: {name!r}")

        if isinstance(value, Mapping):
            targets[name] = _parse_target(name, value)
        else:
            variables[name] = _parse_variable(name, value)

    if not targets:
        raise ConfigError("No target is defined in the configuration")

    logger.debug(f"Loaded {len(variables)} variable(s) and {len(targets)} target(s)")

    return BuildConfig(
        variables=MappingProxyType(variables),
        targets=MappingProxyType(targets),
        source=source,
    )


def _parse_variable(name: str, value: Any) -> Variable:
    """Parse a global variable."""
    if value is None:
        return Variable(name=name, value="")

    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(
            f"Variable '{name}' must be a string, got {type(value).__name__}"
        )

    return Variable(name=name, value=str(value))


def _parse_target(name: str, data: Mapping) -> Target:
    """Parse a target mapping."""
    if "cmd" not in data:
        raise MissingCommand(name)

    for key in data:
        if key not in TARGET_KEYS:
            logger.warning(f"Target '{name}': ignoring unknown key '{key}'")

    cmds = _parse_commands(name, data["cmd"])
    if not cmds:
        raise MissingCommand(name)

    return Target(name=name, deps=_parse_deps(name, data.get("dep")), cmds=cmds)


def _parse_commands(name: str, value: Any) -> Tuple[str, ...]:
    """
    Normalize a cmd field into a tuple of command lines.

    It can be:
        cmd: "cc -c main.c"          -> one command
        cmd: |                       -> one command per non-blank line
            echo Cleaning
            rm -f *.o
        cmd: ["cmd1", "cmd2"]        -> one command per element
    """
    if value is None:
        return ()

    if isinstance(value, str):
        return tuple(line.strip() for line in value.splitlines() if line.strip())

    if isinstance(value, list):
        cmds = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(f"Target '{name}': command in the sequence is not a string: {item!r}")
            if item.strip():
                cmds.append(item.strip())
        return tuple(cmds)

    raise ConfigError(
        f"Target '{name}': cmd must be a string or a sequence of strings, got {type(value).__name__}"
    )


def _parse_deps(name: str, value: Any) -> Tuple[str, ...]:
    """Normalize a dep field into an ordered tuple of names."""
    if value is None:
        return ()

    if isinstance(value, str):
        return (value,)

    if isinstance(value, list):
        deps = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(f"Target '{name}': dependency is not a string: {item!r}")
            deps.append(item)
        return tuple(deps)

    raise ConfigError(
        f"Target '{name}': dep must be a string or a sequence of strings, got {type(value).__name__}"
    )
