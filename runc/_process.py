"""Foreground child processes for the compiler and the cached program."""

import signal
import subprocess
import threading
from typing import List

# Signals the terminal sends to the whole foreground process group
_TERMINAL_SIGNALS = [sig for sig in (getattr(signal, "SIGINT", None), getattr(signal, "SIGQUIT", None))
                     if sig is not None]


def exit_status(returncode: int) -> int:
    """Convert a subprocess return code into a shell-style exit status.
    A child killed by signal N has returncode -N and is reported as 128+N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_foreground(cmd: List[str]) -> int:
    """Run cmd with inherited standard streams and wait for it.

    While the child runs, runc ignores SIGINT and SIGQUIT and leaves them to
    the child, so Ctrl-C ends up in the child's exit status instead of a
    KeyboardInterrupt in runc. The child itself keeps the default handlers.
    Returns: Exit status of the child (128+N if killed by signal N)
    Raises:  OSError if the child cannot be started"""
    with subprocess.Popen(cmd) as process:
        previous = _ignore_terminal_signals()
        try:
            returncode = process.wait()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
    return exit_status(returncode)


def _ignore_terminal_signals() -> dict:
    """Ignore terminal signals in this process. Returns the handlers to restore."""
    # signal.signal only works in the main thread
    if threading.current_thread() is not threading.main_thread():
        return {}
    return {sig: signal.signal(sig, signal.SIG_IGN) for sig in _TERMINAL_SIGNALS}
