"""
Pytest configuration for runc tests.

Features:
- Adds parent directory to Python path so tests can import runc
- Points HOME at a temporary directory so ~/.runc is never touched
- Provides a fake compiler so the cache logic can be tested without clang

Fake compiler:
==============
A small Python script run through sys.executable. It accepts any flags,
reads the source given before "-o" and writes a POSIX shell script to the
output path. The shell script prints its arguments one per line and exits
with the number found in an "exit_status=N" marker in the source (0 if
absent). A "compile_status=N" marker makes the compiler itself fail with N.
Every invocation is appended to compile.log as a JSON argument list.
"""
import json
import shutil
import sys
import textwrap
from pathlib import Path

import pytest

# Add parent directory to Python path so we can import runc
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "clang: tests that run the real clang toolchain (skipped when clang is not installed)"
    )


def pytest_collection_modifyitems(config, items):
    if shutil.which("clang"):
        return
    skip_clang = pytest.mark.skip(reason="clang is not installed")
    for item in items:
        if "clang" in item.keywords:
            item.add_marker(skip_clang)


FAKE_COMPILER_SCRIPT = textwrap.dedent('''\
    import json
    import os
    import re
    import sys

    args = sys.argv[1:]
    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "compile.log"), "a") as f:
        f.write(json.dumps(args) + "\\n")

    output = args[args.index("-o") + 1]
    source = args[args.index("-o") - 1]
    with open(source) as f:
        text = f.read()

    failure = re.search(r"compile_status=(\\d+)", text)
    if failure and int(failure.group(1)):
        sys.stderr.write("fake-cc: error\\n")
        sys.exit(int(failure.group(1)))

    status = re.search(r"exit_status=(\\d+)", text)
    with open(output, "w") as f:
        f.write('#!/bin/sh\\nfor a in "$@"; do echo "$a"; done\\nexit %d\\n' % (int(status.group(1)) if status else 0))
    os.chmod(output, 0o755)
''')


class FakeCompiler:
    """Handle on the fake compiler script and its invocation log."""

    def __init__(self, directory: Path):
        directory.mkdir(parents=True, exist_ok=True)
        self.script = directory / "fake_cc.py"
        self.script.write_text(FAKE_COMPILER_SCRIPT)
        self.log_file = directory / "compile.log"

    @property
    def command(self):
        return [sys.executable, str(self.script)]

    def calls(self):
        """Argument lists of all invocations so far (without the interpreter and script)."""
        if not self.log_file.exists():
            return []
        return [json.loads(line) for line in self.log_file.read_text().splitlines()]


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated home directory, set as $HOME."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def cache_root(home):
    """Default cache root inside the isolated home directory."""
    return home / ".runc" / "cache"


@pytest.fixture
def fake_compiler(tmp_path):
    return FakeCompiler(tmp_path / "toolchain")


@pytest.fixture
def write_source(tmp_path):
    """Factory writing a C source file into a scratch directory."""
    src_dir = tmp_path / "src"
    src_dir.mkdir()

    def _write(text: str, name: str = "script.c") -> Path:
        path = src_dir / name
        path.write_text(text)
        return path

    return _write
