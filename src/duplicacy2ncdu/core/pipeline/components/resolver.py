from __future__ import annotations

"""
Filesystem Metadata Resolver.

Builds the NCDU info block of a path from a single lstat call. Symbolic
links are never followed: a link is reported as itself, flagged as a
non-regular entry.
"""

import os
import stat
from typing import Callable, Optional

from duplicacy2ncdu.domain.constants import BLOCK_SIZE
from duplicacy2ncdu.domain.errors import FilesystemError
from duplicacy2ncdu.domain.export_models import FileRecord

# Signature shared by the real resolver and test doubles
MetadataResolver = Callable[[str, Optional[str]], FileRecord]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_metadata(path: str, name: Optional[str] = None) -> FileRecord:
    """
    Describe a filesystem entry without following symbolic links.

    Args:
        path: Location of the entry.
        name: Display name override (the export root uses its full path).
              Defaults to the base name of path.

    Returns:
        FileRecord: The entry attributes.

    Raises:
        FilesystemError: If the entry cannot be stat'ed or has no base name.
    """
    if name is None:
        name = base_name(path)
        if not name:
            raise FilesystemError(path, "path has no base name")

    try:
        st = os.lstat(path)
    except OSError as e:
        raise FilesystemError(path, e.strerror or str(e)) from e

    return FileRecord(
        name=name,
        asize=st.st_size,
        dsize=allocated_size(st),
        dev=st.st_dev,
        ino=st.st_ino,
        nlink=st.st_nlink,
        notreg=not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode)),
    )


def base_name(path: str) -> str:
    """
    Return the final component of a path, ignoring trailing separators.

    '.' and '..' do not name an entry and yield an empty string.
    """
    name = os.path.basename(path.rstrip("/" + os.sep))
    if name in (".", ".."):
        return ""
    return name


def allocated_size(st: os.stat_result) -> int:
    """
    Bytes of storage consumed by an entry.

    Platforms without st_blocks (Windows) fall back to the apparent size
    rounded up to whole blocks.
    """
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        blocks = (st.st_size + BLOCK_SIZE - 1) // BLOCK_SIZE
    return blocks * BLOCK_SIZE
