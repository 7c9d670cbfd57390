"""
Main runc application.

Provides the Runc class: read a source file, find or build its cached
program, and run it.
"""

import os
import time
from pathlib import Path
from typing import List, Optional

from ._cache import DATA_SUBDIR, RuncCache, resolve_cache_root, resolve_home, source_fingerprint
from ._compiler import Compiler
from ._config import CONFIG_FILENAME, RuncConfig
from ._errors import CompileFailure, NoHomeDirectory
from ._hint import extract_hint
from ._launcher import launch
from ._logger import RuncLogger
from ._source_file import SourceFile


class Runc:
    """Compile-once, run-many runner for C source files."""

    def __init__(self, config: Optional[RuncConfig] = None, cache_dir: Optional[Path] = None):
        """Args:    config: Settings that take precedence over ~/.runc/config.json
                 cache_dir: Cache directory (defaults to ~/.runc/cache)"""
        self.config = config or RuncConfig()
        self.cache_dir = cache_dir

    def _resolve_config(self) -> RuncConfig:
        """Combine explicit settings with ~/.runc/config.json.
        The config file is only read when the cache root or compiler is not given."""
        config = self.config.merged(RuncConfig(cache_dir=self.cache_dir))
        if config.cache_dir is not None and config.compiler is not None:
            return config

        try:
            data_dir = resolve_home() / DATA_SUBDIR
        except NoHomeDirectory:
            if config.cache_dir is None:
                raise
            return config
        return RuncConfig.load(data_dir / CONFIG_FILENAME).merged(config)

    def run(self, source_path: Path, program_args: List[str]) -> int:
        """Main execution: build the program on a cache miss, then run it.
        Args:    source_path: C source file to run
                 program_args: Arguments for the program
        Returns: The program's exit status
        Raises:  RuncError subclasses; CompileFailure if the compiler exits nonzero"""
        source = SourceFile.read(source_path)
        fingerprint = source_fingerprint(source.content)

        config = self._resolve_config()
        cache_root = Path(os.path.abspath(config.cache_dir or resolve_cache_root()))
        cache = RuncCache(cache_root)

        logger = RuncLogger(cache_root)
        try:
            entry = cache.lookup(fingerprint)
            if entry:
                logger.attach_file()
                logger.info(f"CACHE HIT - file: {source}, entry: {entry.name}")
            else:
                entry = self._build(source, fingerprint, cache, Compiler(config.compiler, logger), logger)
        finally:
            logger.close()

        return launch(entry, program_args)

    def _build(self, source: SourceFile, fingerprint: bytes, cache: RuncCache,
               compiler: Compiler, logger: RuncLogger) -> Path:
        """Compile source into the cache.
        The program is built in a staging directory and renamed into place, so
        an entry path never holds a partial or failed build.
        Returns: Entry path of the new program"""
        start_time = time.perf_counter()
        cache.ensure_root()
        logger.attach_file()

        hint = extract_hint(source.text)
        with cache.stage(fingerprint) as staged:
            returncode = compiler.compile(source.path, staged, hint)
            if returncode != 0:
                logger.warning(f"COMPILE FAILED - file: {source}, returncode: {returncode}")
                raise CompileFailure(source.path, returncode)
            entry = cache.commit(staged, fingerprint)

        logger.info(f"CACHE MISS - file: {source}, hint: {hint!r}, "
                    f"Time: {time.perf_counter()-start_time:.3f} seconds, entry: {entry.name}")
        return entry
