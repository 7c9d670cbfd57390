"""
Exceptions raised by runc.

Every component raises one of these. Only the command line entry point
catches them, turning each into a one-line diagnostic and an exit status.
"""

from pathlib import Path


class RuncError(Exception):
    """Base class for all runc failures."""


class SourceReadError(RuncError):
    """The source file could not be read."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"could not read {path}"
        super().__init__(f"{message}: {reason}" if reason else message)


class HashError(RuncError):
    """The fingerprint of the source could not be computed."""


class PathResolutionError(RuncError):
    """The cache location could not be determined."""


class NoHomeDirectory(PathResolutionError):
    """Neither $HOME nor the user database yields a home directory."""

    def __init__(self):
        super().__init__("could not get cache path: no home directory found")


class CacheDirectoryError(RuncError):
    """A cache directory could not be created."""


class ConfigError(RuncError):
    """The configuration file is unreadable or malformed."""


class CompileInvocationError(RuncError):
    """The compiler command could not be built or started."""


class CompileFailure(RuncError):
    """The compiler ran and exited with a nonzero status."""

    def __init__(self, source: Path, returncode: int):
        self.source = source
        self.returncode = returncode
        super().__init__(f"compiling {source} failed with exit status {returncode}")


class MissingArtifactError(RuncError):
    """The compiler succeeded but left no artifact behind."""


class LaunchInvocationError(RuncError):
    """The cached program could not be started."""
