from __future__ import annotations

"""
Domain Constants.

Centralizes the producer identity, the NCDU export format version and the
Duplicacy log line grammar shared by the conversion pipeline.
"""

import re
from typing import Pattern, Tuple

PROGNAME = "duplicacy2ncdu"
PROGVER = "0.1.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# NCDU EXPORT FORMAT
# -----------------------------------------------------------------------------

# Format compatible with NCDU >= 1.16
NCDU_FORMAT_VERSION: Tuple[int, int] = (1, 2)

# st_blocks is always expressed in 512-byte units, whatever the filesystem
BLOCK_SIZE = 512

# -----------------------------------------------------------------------------
# DUPLICACY LOG GRAMMAR
# -----------------------------------------------------------------------------

# File inclusion lines of `duplicacy -log -debug backup -enum-only`
INCLUDE_LINE_RE: Pattern[str] = re.compile(
    r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}.\d{3} DEBUG PATTERN_INCLUDE "
    r"(.*) is included(?: by pattern .*)?$"
)

DIRECTORY_SUFFIX = "/"

# -----------------------------------------------------------------------------
# ORDERING CHECK MODES
# -----------------------------------------------------------------------------

ORDER_CHECK_STRICT = "strict"
ORDER_CHECK_WARN = "warn"
ORDER_CHECK_OFF = "off"
ORDER_CHECK_MODES: Tuple[str, ...] = (ORDER_CHECK_STRICT, ORDER_CHECK_WARN, ORDER_CHECK_OFF)

STDIO_MARKER = "-"
