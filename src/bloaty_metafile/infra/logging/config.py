from __future__ import annotations

"""
Logging Configuration Models.

Holds the settings consumed by configure_logging. The console stream is
always stderr (stdout carries the metafile); an optional rotating log
file keeps a timestamped trace of attribution runs.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging bootstrap.

    Attributes:
        level: Minimum severity, by name ('DEBUG', 'INFO', ...).
        console: Emit records on stderr.
        log_file: Rotating trace file, or None for console only.
        max_bytes: Size at which the trace file rolls over.
        backup_count: Rolled-over trace files kept beside the current one.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the trace file.
        datefmt: Timestamp layout in the trace file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings derived from the '--debug' and '--log-file' flags."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file or None)
