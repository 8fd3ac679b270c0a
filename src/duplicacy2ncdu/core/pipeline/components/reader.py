from __future__ import annotations

"""
Log Line Reading Component.

Streams the Duplicacy log one line at a time, stripped of its line
terminator, so the extractor never sees the whole log in memory.
"""

from typing import IO, Iterator

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def stream_log_lines(stream: IO[str]) -> Iterator[str]:
    """
    Generate a line-by-line stream of log content.

    Both LF and CRLF terminators are removed; all other whitespace is
    significant because it may be part of a file name.

    Args:
        stream: An open text stream (file or standard input).

    Yields:
        str: Log lines without their terminator.
    """
    for line in stream:
        yield _strip_terminator(line)


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line
