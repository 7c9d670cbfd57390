"""
Compiler command wrapper for runc.

Builds the compiler command line as a list of arguments (never a shell
string) and runs it.
"""

import logging
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from ._errors import CompileInvocationError
from ._hint import hint_only_flags
from ._process import run_foreground


DEFAULT_COMPILER = ["clang", "-Wall", "-std=c99"]


class Compiler:
    """C compiler command, optionally adjusted by a hint from the source."""

    def __init__(self, command: Optional[List[str]] = None, logger: Optional[logging.Logger] = None):
        """Args:    command: Default compiler invocation (program plus flags)
                 logger: Where to record executed command lines"""
        self.command = list(command) if command else list(DEFAULT_COMPILER)
        self.logger = logger

    def build_command(self, source: Path, output: Path, hint: Optional[str] = None) -> List[str]:
        """Build the complete compile command.
        Args:    source: Source file to compile
                 output: Path the executable is written to
                 hint: Flags to add, or a full compiler command to use instead of the default
        Returns: Command list for subprocess"""
        cmd = list(self.command)

        if hint is not None:
            try:
                hint_args = shlex.split(hint)
            except ValueError as e:
                raise CompileInvocationError(f"could not parse build hint {hint!r}: {e}") from e

            if hint_only_flags(hint):
                cmd.extend(hint_args)
            else:
                cmd = hint_args

        # Source before -o, as with the default toolchain
        cmd.append(str(source))
        cmd.extend(["-o", str(output)])
        return cmd

    def compile(self, source: Path, output: Path, hint: Optional[str] = None) -> int:
        """Compile source into output. Compiler diagnostics go straight to the terminal.
        Returns: Compiler exit status (128+N if the compiler was killed by signal N)
        Raises:  CompileInvocationError if the compiler cannot be started"""
        cmd = self.build_command(source, output, hint)

        cmdline = shlex.join(cmd)
        print(cmdline, file=sys.stderr, flush=True)
        if self.logger:
            self.logger.info(f"COMPILE - {cmdline}")

        try:
            return run_foreground(cmd)
        except OSError as e:
            raise CompileInvocationError(f"could not run compiler {cmd[0]}: {e.strerror or e}") from e
