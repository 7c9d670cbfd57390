"""Runs cached programs."""

from pathlib import Path
from typing import List

from ._errors import LaunchInvocationError
from ._process import run_foreground


def launch(artifact: Path, args: List[str]) -> int:
    """Run artifact with args, each passed through as-is.
    Standard streams are inherited and there is no timeout. Ctrl-C is left
    to the program.
    Returns: The program's exit status, or 128+N if it was killed by signal N
    Raises:  LaunchInvocationError if the program cannot be started"""
    cmd = [str(artifact)] + list(args)

    try:
        return run_foreground(cmd)
    except OSError as e:
        raise LaunchInvocationError(f"failed to launch {artifact}: {e.strerror or e}") from e
