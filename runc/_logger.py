"""Logging functionality for runc."""

import logging
from pathlib import Path


class RuncLogger(logging.Logger):
    """Logger for runc operations, writing to <cache root>/runc.log."""

    def __init__(self, log_dir: Path):
        """Initialize logger without touching the file system.
        Records are dropped until attach_file() succeeds.
        Args:    log_dir: Directory where the log file will be written"""
        super().__init__("runc", logging.INFO)

        self.log_file = log_dir / "runc.log"

        # Keeps logging's last-resort stderr handler out of the way
        self.addHandler(logging.NullHandler())

    def attach_file(self) -> bool:
        """Open the log file and start writing records to it. Call once log_dir exists.
        A log file that cannot be opened (read-only cache, a directory in the way)
        leaves logging disabled; it never stops a run.
        Returns: True if records go to the log file"""
        if any(isinstance(handler, logging.FileHandler) for handler in self.handlers):
            return True

        try:
            handler = logging.FileHandler(self.log_file)
        except OSError:
            return False
        handler.setLevel(logging.INFO)

        # Format: timestamp - level - message
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)

        self.addHandler(handler)
        return True

    def close(self):
        """Close the file handler."""
        for handler in list(self.handlers):
            handler.close()
            self.removeHandler(handler)
