"""
Cache management for runc.

Compiled programs are stored under ~/.runc/cache, one file per distinct
source content, named by the hex SHA-1 of the source bytes. An entry that
exists is a cache hit; entries are never invalidated or removed.
"""

import hashlib
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional

from ._errors import CacheDirectoryError, HashError, MissingArtifactError, NoHomeDirectory

try:
    import pwd
except ImportError:  # Windows has no user database module
    pwd = None


FINGERPRINT_SIZE = 20  # bytes in a SHA-1 digest
DATA_SUBDIR = Path(".runc")
CACHE_SUBDIR = DATA_SUBDIR / "cache"
DIR_MODE = 0o775  # rwx for owner and group, r-x for others


def source_fingerprint(data: bytes) -> bytes:
    """Calculate the cache key of the given source bytes.
    SHA-1 is used as a fast content key, not for tamper resistance.
    Args:    data: Full content of the source file
    Returns: 20-byte digest
    Raises:  HashError if the digest is unavailable (e.g. FIPS mode)"""
    try:
        return hashlib.sha1(data, usedforsecurity=False).digest()
    except ValueError as e:
        raise HashError(f"could not compute hash: {e}") from e


def resolve_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Find the user's home directory.
    Uses $HOME if set, else the home directory of the current user record.
    Args:    environ: Environment to read (defaults to os.environ)
    Raises:  NoHomeDirectory if neither source gives a path"""
    if environ is None:
        environ = os.environ

    home = environ.get("HOME")
    if not home and pwd is not None:
        try:
            home = pwd.getpwuid(os.getuid()).pw_dir
        except KeyError:
            # uid has no entry in the user database
            home = None

    if not home:
        raise NoHomeDirectory()
    return Path(home)


def resolve_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return <home>/.runc/cache."""
    return resolve_home(environ) / CACHE_SUBDIR


def resolve_entry_path(cache_root: Path, fingerprint: bytes) -> Path:
    """Path of the cached program for a fingerprint. Pure, no file system access."""
    return cache_root / fingerprint.hex()


def ensure_directory(path: Path, mode: int = DIR_MODE):
    """Create path and any missing parents, one component at a time.
    Existing directories are fine. Anything else that prevents creation
    (permissions, a file in the way, full disk) raises CacheDirectoryError."""
    path = Path(os.path.abspath(path))
    for component in reversed([path, *path.parents]):
        if component.is_dir():
            continue
        try:
            os.mkdir(component, mode)
        except FileExistsError:
            if not component.is_dir():
                raise CacheDirectoryError(
                    f"could not create cache directory at {path}: {component} is not a directory")
        except OSError as e:
            raise CacheDirectoryError(
                f"could not create cache directory at {path}: {e.strerror or e}") from e


class RuncCache:
    """Content-addressed store of compiled programs."""

    def __init__(self, cache_root: Path):
        self.cache_root = cache_root

    def entry_path(self, fingerprint: bytes) -> Path:
        return resolve_entry_path(self.cache_root, fingerprint)

    def lookup(self, fingerprint: bytes) -> Optional[Path]:
        """Return the entry path if a readable program is cached for fingerprint, else None."""
        entry = self.entry_path(fingerprint)
        if entry.is_file() and os.access(entry, os.R_OK):
            return entry
        return None

    def ensure_root(self):
        ensure_directory(self.cache_root)

    @contextmanager
    def stage(self, fingerprint: bytes) -> Iterator[Path]:
        """Yield a private path to build into. Its directory is removed on exit.

        The staging directory lives inside the cache root so that commit()
        is a rename on the same file system."""
        try:
            staging_dir = Path(tempfile.mkdtemp(prefix=f".{fingerprint.hex()}.", dir=self.cache_root))
        except OSError as e:
            raise CacheDirectoryError(
                f"could not create staging directory in {self.cache_root}: {e.strerror or e}") from e
        try:
            yield staging_dir / fingerprint.hex()
        finally:
            shutil.rmtree(staging_dir, ignore_errors=True)

    def commit(self, staged: Path, fingerprint: bytes) -> Path:
        """Atomically move a finished program into its entry path.
        Concurrent commits of the same fingerprint are harmless: the same source
        gives an equivalent program and the last rename wins.
        Returns: Entry path"""
        if not staged.is_file():
            raise MissingArtifactError(f"compiler did not produce {staged}")

        entry = self.entry_path(fingerprint)
        try:
            os.replace(staged, entry)
        except OSError as e:
            raise CacheDirectoryError(f"could not store {entry}: {e.strerror or e}") from e
        return entry
