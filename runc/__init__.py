"""runc - Run C source files like scripts

runc compiles a C source file into a cache keyed by the SHA-1 of its
content, then runs the cached program. The source is only recompiled when
its bytes change.

Example usage:
    from pathlib import Path
    from runc import Runc

    runner = Runc()
    returncode = runner.run(Path("hello.c"), ["--name", "world"])
"""

from ._runc import Runc
from ._config import RuncConfig
from ._errors import (
    RuncError, SourceReadError, HashError, PathResolutionError, NoHomeDirectory,
    CacheDirectoryError, ConfigError, CompileInvocationError, CompileFailure,
    MissingArtifactError, LaunchInvocationError,
)

__all__ = [
    'Runc', 'RuncConfig',
    'RuncError', 'SourceReadError', 'HashError', 'PathResolutionError', 'NoHomeDirectory',
    'CacheDirectoryError', 'ConfigError', 'CompileInvocationError', 'CompileFailure',
    'MissingArtifactError', 'LaunchInvocationError',
]
