"""
End-to-end tests running real shell commands through the CLI and engine.
"""

import sys

import pytest

from ymake.cli.parser import CLI
from ymake.config.parser import parse_config
from ymake.core.exceptions import CommandFailed
from ymake.engine import build

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX sh"),
]


PIPELINE = """
GREETING: hello
OUT: $(shell echo build)

app:
  dep: [lib.txt, obj.txt]
  cmd: |
    cat $^ > $@.txt
    echo $(OUT) >> $@.txt

lib.txt:
  dep: obj.txt
  cmd: echo lib from $< > $@

obj.txt:
  dep: source.c
  cmd: echo $(GREETING) $(NAME_FROM_ENV) > $@

clean:
  cmd: rm -f app.txt lib.txt obj.txt
"""


def test_pipeline_builds_in_order(write_ymakefile, tmp_path, monkeypatch):
    """Test a small graph produces files in dependency order."""
    monkeypatch.setenv("NAME_FROM_ENV", "world")
    config = parse_config(write_ymakefile(PIPELINE))

    report = build(config, cwd=tmp_path)

    assert report.targets == ["obj.txt", "lib.txt", "app"]
    assert (tmp_path / "obj.txt").read_text() == "hello world\n"
    assert (tmp_path / "lib.txt").read_text() == "lib from obj.txt\n"
    assert (tmp_path / "app.txt").read_text() == (
        "lib from obj.txt\nhello world\nbuild\n"
    )


def test_failing_command_stops_build(write_ymakefile, tmp_path):
    """Test the first failing command aborts the remaining targets."""
    config = parse_config(
        write_ymakefile(
            """
last:
  dep: third
  cmd: touch last.done
third:
  dep: second
  cmd: touch third.done
second:
  dep: first
  cmd: |
    touch second.started
    exit 3
first:
  cmd: touch first.done
"""
        )
    )

    with pytest.raises(CommandFailed) as exc_info:
        build(config, cwd=tmp_path)

    assert exc_info.value.target == "second"
    assert exc_info.value.exit_code == 3
    assert (tmp_path / "first.done").exists()
    assert (tmp_path / "second.started").exists()
    assert not (tmp_path / "third.done").exists()
    assert not (tmp_path / "last.done").exists()


def test_cli_exit_codes(write_ymakefile, tmp_path):
    """Test the CLI reports success and failure through its exit code."""
    write_ymakefile(
        """
ok:
  cmd: "true"
broken:
  cmd: "false"
"""
    )

    assert CLI().run(["-C", str(tmp_path), "-q"]) == 0
    assert CLI().run(["broken", "-C", str(tmp_path), "-q"]) == 1


def test_cli_cycle_is_fatal(write_ymakefile, tmp_path, capsys):
    """Test dependency cycles are reported before anything runs."""
    write_ymakefile(
        """
a:
  dep: b
  cmd: touch a.done
b:
  dep: a
  cmd: touch b.done
"""
    )

    assert CLI().run(["-C", str(tmp_path)]) == 1
    assert "Dependency cycle detected: a -> b -> a" in capsys.readouterr().err
    assert not (tmp_path / "a.done").exists()
    assert not (tmp_path / "b.done").exists()
