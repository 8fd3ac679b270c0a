from __future__ import annotations

"""
Duplicacy Inclusion Line Extractor.

Recognizes the PATTERN_INCLUDE lines emitted by
`duplicacy -log -debug backup -enum-only` and hands the captured paths to
the tree emitter. Anything else in the log is noise and is skipped without
complaint; the whole-line match is the only validation performed.
"""

import logging
from typing import Iterable, Iterator, Optional

from duplicacy2ncdu.domain.constants import DIRECTORY_SUFFIX, INCLUDE_LINE_RE
from duplicacy2ncdu.domain.pipeline_models import ExtractionStats

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_included_path(line: str) -> Optional[str]:
    """
    Return the path carried by an inclusion line.

    Args:
        line: One log line, without its terminator.

    Returns:
        Optional[str]: The captured path, or None if the line does not match.
    """
    match = INCLUDE_LINE_RE.match(line)
    if match is None:
        return None
    return match.group(1)


def is_directory_notice(path: str) -> bool:
    """Directory inclusions are logged with a trailing separator."""
    return path.endswith(DIRECTORY_SUFFIX)


def iter_included_files(
        lines: Iterable[str],
        stats: Optional[ExtractionStats] = None,
) -> Iterator[str]:
    """
    Filter a stream of log lines down to included file paths.

    Directory notices are dropped: directories are synthesized by the tree
    emitter from the file paths below them.

    Args:
        lines: Log lines in input order.
        stats: Optional counters updated while iterating.

    Yields:
        str: File paths, in input order.
    """
    if stats is None:
        stats = ExtractionStats()

    for line in lines:
        stats.lines_read += 1
        path = extract_included_path(line)
        if path is None:
            continue

        stats.lines_matched += 1
        if is_directory_notice(path):
            stats.directories_skipped += 1
            continue

        yield path

    logger.debug(
        f"Extraction finished: {stats.lines_read} lines, "
        f"{stats.lines_matched} matched, {stats.directories_skipped} directories skipped"
    )
