"""
Source file handling for runc.

Provides SourceFile, the raw bytes of the script being run.
"""

from pathlib import Path

from ._errors import SourceReadError


class SourceFile:
    """Immutable path and byte content of a source file, read once per invocation."""

    def __init__(self, path: Path, content: bytes):
        self._path = path
        self._content = content

    @classmethod
    def read(cls, path: Path) -> 'SourceFile':
        """Read the whole file.
        Args:    path: Path to the source file
        Returns: SourceFile with the file's bytes
        Raises:  SourceReadError if the file cannot be read"""
        try:
            with open(path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise SourceReadError(path, e.strerror or str(e)) from e
        return cls(path, content)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def text(self) -> str:
        """Content decoded for scanning. Undecodable bytes are replaced, never fatal."""
        return self._content.decode('utf-8', errors='replace')

    def __str__(self) -> str:
        return str(self._path)
