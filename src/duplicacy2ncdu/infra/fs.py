from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, the per-user data directory and the text
streams the conversion reads from and writes to. Both streams use the
'surrogateescape' error handler so that file names which are not valid
UTF-8 travel byte-exact from the log to lstat and into the export.
"""

import contextlib
import os
import sys
from typing import IO, Iterator, Optional

from duplicacy2ncdu.domain.constants import STDIO_MARKER

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Duplicacy2Ncdu"
UNIX_APP_DIR_NAME = ".duplicacy2ncdu"
STREAM_ENCODING = "utf-8"
STREAM_ERRORS = "surrogateescape"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Duplicacy2Ncdu
    - Linux/Mac: ~/.duplicacy2ncdu

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def is_stdio(path: Optional[str]) -> bool:
    """Return True when the path designates stdin/stdout."""
    return (path or "").strip() == STDIO_MARKER


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). The stdio marker '-' is returned untouched. Reverts to
    fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path, or '-'.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    if is_stdio(p):
        return STDIO_MARKER
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# STREAM MANAGEMENT
# -----------------------------------------------------------------------------

@contextlib.contextmanager
def open_input_stream(path: str) -> Iterator[IO[str]]:
    """
    Open the log source for line iteration.

    Args:
        path: File path, or '-' for standard input.

    Yields:
        IO[str]: A text stream. Standard input is wrapped, never closed.

    Raises:
        OSError: If the file cannot be opened.
    """
    if is_stdio(path):
        stream = open(
            sys.stdin.fileno(), "r",
            encoding=STREAM_ENCODING, errors=STREAM_ERRORS, closefd=False,
        )
    else:
        stream = open(path, "r", encoding=STREAM_ENCODING, errors=STREAM_ERRORS)
    with stream:
        yield stream


@contextlib.contextmanager
def open_output_stream(path: str, overwrite: bool = True) -> Iterator[IO[str]]:
    """
    Open the export destination for incremental writing.

    Args:
        path: File path, or '-' for standard output.
        overwrite: When False, refuse to replace an existing file.

    Yields:
        IO[str]: A buffered text stream, flushed on exit.

    Raises:
        FileExistsError: If the file exists and overwrite is False.
        OSError: If the file cannot be created.
    """
    if is_stdio(path):
        sys.stdout.flush()
        stream = open(
            sys.stdout.fileno(), "w",
            encoding=STREAM_ENCODING, errors=STREAM_ERRORS, closefd=False,
        )
    else:
        parent = os.path.dirname(os.path.abspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        mode = "w" if overwrite else "x"
        stream = open(path, mode, encoding=STREAM_ENCODING, errors=STREAM_ERRORS)
    with stream:
        yield stream
