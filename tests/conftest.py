"""
Pytest configuration and shared fixtures for ymake tests.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pytest

from ymake.config.parser import load_config_data
from ymake.core.interfaces import ProcessExecutor, ProcessResult


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "e2e: marks tests that run real shell commands"
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging.basicConfig(force=True) calls made by CLI runs."""
    root = logging.getLogger()
    level = root.level
    handlers = root.handlers[:]
    yield
    root.setLevel(level)
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)


class RecordingExecutor(ProcessExecutor):
    """Fake process executor that records calls instead of running them."""

    def __init__(
        self,
        exit_codes: Optional[Dict[str, int]] = None,
        outputs: Optional[Dict[str, bytes]] = None,
    ):
        self.exit_codes = exit_codes or {}
        self.outputs = outputs or {}
        self.calls: List[Tuple[str, Path, bool]] = []

    def execute(
        self, command: str, cwd: Union[str, Path], capture_output: bool = False
    ) -> ProcessResult:
        self.calls.append((command, Path(cwd), capture_output))
        return ProcessResult(
            exit_code=self.exit_codes.get(command, 0),
            stdout=self.outputs.get(command, b"") if capture_output else b"",
        )

    @property
    def commands(self) -> List[str]:
        """Build commands dispatched, excluding $(shell ...) captures."""
        return [command for command, _, captured in self.calls if not captured]


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    """Executor that succeeds for every command and records it."""
    return RecordingExecutor()


@pytest.fixture
def make_executor():
    """Factory for executors with preset exit codes and captured outputs."""

    def factory(exit_codes=None, outputs=None) -> RecordingExecutor:
        return RecordingExecutor(exit_codes=exit_codes, outputs=outputs)

    return factory


WORKED_EXAMPLE = {
    "CC": "gcc",
    "CFLAGS": "-Iinclude",
    "main": {"dep": ["main.o", "hello.so"], "cmd": "$(CC) $< $(LDFLAGS) -o $@"},
    "main.o": {"dep": "main.c", "cmd": "$(CC) $(CFLAGS) -c $<"},
    "hello.so": {"dep": "hello.o", "cmd": "$(CC) $< -shared -o $@"},
    "hello.o": {"dep": "hello.c", "cmd": "$(CC) $(CFLAGS) -c $<"},
}


@pytest.fixture
def worked_example_config():
    """Configuration of the compile/link example project."""
    return load_config_data(WORKED_EXAMPLE)


@pytest.fixture
def write_ymakefile(tmp_path):
    """Write a YMakefile.yml into tmp_path and return its path."""

    def writer(content: str, name: str = "YMakefile.yml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return writer
