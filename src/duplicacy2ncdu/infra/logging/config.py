from __future__ import annotations

"""
Logging Settings.

A conversion is a single short run whose stdout may be the export itself,
so console output is kept to one terse line per record on stderr. The file
log, when enabled, accumulates runs and tags each record with the process
id so interleaved or consecutive conversions can be told apart.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted values of the 'log_level' preference
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for configure_logging().

    Attributes:
        level: Name of the minimum severity, a key of _LEVEL_MAP.
        console: Mirror records to stderr.
        log_file: Rotating log file shared by successive runs, if any.
        max_bytes: Segment size before rotation. One debug run over a large
                   repository can log a line per directory.
        backup_count: Rotated segments kept next to the active file.
        console_fmt: Format of stderr lines, prefixed like other CLI filters.
        file_fmt: Format of file records, including the run's process id.
        datefmt: Timestamp format of file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    console_fmt: str = "duplicacy2ncdu: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s | pid %(process)d | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
