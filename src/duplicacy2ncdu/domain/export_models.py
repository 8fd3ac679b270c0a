from __future__ import annotations

"""
NCDU Export Data Models.

Defines the immutable records serialized into the NCDU JSON export: the
per-entry info block and the producer metadata header.
"""

from dataclasses import dataclass
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ENTRY INFO BLOCK
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    Attributes of one filesystem entry captured at emission time.

    Attributes:
        name: Base name of the entry (absolute path for the export root).
        asize: Apparent size in bytes.
        dsize: Allocated size in bytes (512-byte blocks).
        dev: Device identifier.
        ino: Inode number.
        nlink: Hard link count.
        notreg: True for entries that are neither directories nor regular
                files (symlinks, sockets, FIFOs, device nodes).
    """
    name: str
    asize: int
    dsize: int
    dev: int
    ino: int
    nlink: int
    notreg: bool

    def to_dict(self) -> Dict[str, Any]:
        """Return the NCDU info block with keys in export order."""
        return {
            "name": self.name,
            "asize": self.asize,
            "dsize": self.dsize,
            "dev": self.dev,
            "ino": self.ino,
            "nlink": self.nlink,
            "notreg": self.notreg,
        }

# -----------------------------------------------------------------------------
# DOCUMENT HEADER
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExportMetadata:
    """
    Producer information written as the third element of the export.

    Attributes:
        progname: Name of the producing program.
        progver: Version of the producing program.
        timestamp: Export time in Unix seconds.
    """
    progname: str
    progver: str
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "progname": self.progname,
            "progver": self.progver,
            "timestamp": self.timestamp,
        }
