"""
Configuration for runc.

Settings come from an optional JSON file in the data directory
(~/.runc/config.json by default):

    {
        "compiler": "gcc -Wall -std=c11",
        "cache_dir": "/var/tmp/runc-cache"
    }

"compiler" may also be a list of arguments. Both keys are optional.
"""

import json
import shlex
from pathlib import Path
from typing import List, Optional

from ._errors import ConfigError


CONFIG_FILENAME = "config.json"


def parse_command(value, what: str) -> List[str]:
    """Turn a command given as a string or a list of strings into an argument list."""
    if isinstance(value, str):
        try:
            command = shlex.split(value)
        except ValueError as e:
            raise ConfigError(f"invalid {what} {value!r}: {e}") from e
    elif isinstance(value, list) and all(isinstance(arg, str) for arg in value):
        command = list(value)
    else:
        raise ConfigError(f"{what} must be a string or a list of strings, got {value!r}")

    if not command:
        raise ConfigError(f"{what} is empty")
    return command


class RuncConfig:
    """runc settings. None means 'use the built-in default'."""

    def __init__(self, compiler: Optional[List[str]] = None, cache_dir: Optional[Path] = None):
        self.compiler = compiler
        self.cache_dir = cache_dir

    @classmethod
    def load(cls, config_file: Path) -> 'RuncConfig':
        """Load settings from config_file. A missing file gives the defaults.
        Raises:  ConfigError if the file is unreadable, not JSON, or has bad values"""
        try:
            with open(config_file, 'r', encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return cls()
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"could not load {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_file} must contain a JSON object")

        compiler = None
        if data.get("compiler") is not None:
            compiler = parse_command(data["compiler"], "compiler")

        cache_dir = None
        if data.get("cache_dir") is not None:
            if not isinstance(data["cache_dir"], str):
                raise ConfigError(f"cache_dir must be a string, got {data['cache_dir']!r}")
            cache_dir = Path(data["cache_dir"]).expanduser()

        return cls(compiler=compiler, cache_dir=cache_dir)

    def merged(self, other: 'RuncConfig') -> 'RuncConfig':
        """Return a config where settings in other take precedence over settings in self."""
        return RuncConfig(
            compiler=other.compiler if other.compiler is not None else self.compiler,
            cache_dir=other.cache_dir if other.cache_dir is not None else self.cache_dir,
        )

    def __repr__(self):
        return f"RuncConfig(compiler={self.compiler!r}, cache_dir={self.cache_dir!r})"
