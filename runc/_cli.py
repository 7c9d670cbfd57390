"""
Command line entry point for runc.

Usage:
    runc hello.c                        # compile on first use, then run
    runc hello.c --name world           # arguments after the source go to the program
    runc --cache-dir /tmp/rc hello.c    # use another cache directory
    runc --compiler "gcc -O2" hello.c   # use another default compiler command
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ._config import RuncConfig, parse_command
from ._errors import CompileFailure, RuncError
from ._runc import Runc


PROG = "runc"
VERSION = "1.0.0"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, description="Compile a C source file once and run it like a script",
                             formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument("--version",   action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--cache-dir", type=str, metavar="PATH", help="Cache directory (default: ~/.runc/cache)")
    parser.add_argument("--compiler",  type=str, metavar="CMD",  help="Default compiler command (default: clang -Wall -std=c99)")

    parser.add_argument("source",       metavar="SOURCE", help="C source file to run")
    parser.add_argument("program_args", metavar="ARG", nargs=argparse.REMAINDER, help="Arguments passed to the program")
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the exit status."""
    parser = _build_parser()
    if args is None:
        args = sys.argv[1:]
    if not args:
        parser.print_usage(sys.stderr)
        return 1

    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1

    try:
        compiler = parse_command(parsed.compiler, "--compiler") if parsed.compiler is not None else None
        cache_dir = Path(parsed.cache_dir).expanduser() if parsed.cache_dir else None

        runner = Runc(RuncConfig(compiler=compiler), cache_dir=cache_dir)
        return runner.run(Path(parsed.source), parsed.program_args)
    except CompileFailure as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return e.returncode
    except RuncError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
