from __future__ import annotations

"""
Conversion Pipeline Engine.

Wires the stages of a run: log reader -> inclusion extractor -> tree
emitter -> streaming JSON writer. Processing is strictly sequential; every
line is fully handled before the next one is read, and the first fatal
error aborts the run. An aborted export is incomplete and unusable.
"""

import logging
import os
import time
from typing import Any, Dict, Iterable, IO, Optional

from duplicacy2ncdu.core.pipeline.components.extractor import iter_included_files
from duplicacy2ncdu.core.pipeline.components.reader import stream_log_lines
from duplicacy2ncdu.core.pipeline.components.resolver import (
    MetadataResolver,
    resolve_metadata,
)
from duplicacy2ncdu.core.pipeline.components.writer import JsonStreamWriter
from duplicacy2ncdu.core.services.tree_emitter import TreeEmitter
from duplicacy2ncdu.domain.constants import PROGNAME, PROGVER, ORDER_CHECK_STRICT
from duplicacy2ncdu.domain.errors import ConversionError, OutputExistsError
from duplicacy2ncdu.domain.export_models import ExportMetadata
from duplicacy2ncdu.domain.pipeline_models import (
    ConversionResult,
    EmitterStats,
    ExtractionStats,
    create_error_result,
    create_success_result,
)
from duplicacy2ncdu.infra.fs import is_stdio, open_input_stream, open_output_stream

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_metadata(timestamp: Optional[int] = None) -> ExportMetadata:
    """Producer header for a new export, stamped with the current time by default."""
    if timestamp is None:
        timestamp = int(time.time())
    return ExportMetadata(progname=PROGNAME, progver=PROGVER, timestamp=timestamp)


def convert_stream(
        lines: Iterable[str],
        out: IO[str],
        root_path: str,
        *,
        order_check: str = ORDER_CHECK_STRICT,
        resolver: MetadataResolver = resolve_metadata,
        metadata: Optional[ExportMetadata] = None,
        extraction: Optional[ExtractionStats] = None,
        emission: Optional[EmitterStats] = None,
) -> EmitterStats:
    """
    Convert log lines into an NCDU export written to an open stream.

    Args:
        lines: Log lines without terminators.
        out: Destination text stream.
        root_path: Directory the logged paths are relative to.
        order_check: Depth-first violation policy ('strict', 'warn', 'off').
        resolver: Metadata lookup, replaceable for testing.
        metadata: Producer header; defaults to build_metadata().
        extraction: Optional counters filled by the extractor.
        emission: Optional counters filled by the emitter.

    Returns:
        EmitterStats: Counters describing the written document.

    Raises:
        ConversionError: On filesystem or ordering failures.
        OSError: On stream I/O failures.
    """
    writer = JsonStreamWriter(out)
    emitter = TreeEmitter(
        writer, root_path, resolver=resolver, order_check=order_check, stats=emission,
    )

    emitter.start(metadata or build_metadata())
    emitter.visit_all(iter_included_files(lines, extraction))
    emitter.finish()
    return emitter.stats


def run_conversion(
        cfg: Dict[str, Any],
        *,
        resolver: MetadataResolver = resolve_metadata,
) -> ConversionResult:
    """
    Execute a full conversion described by a validated configuration.

    Args:
        cfg: Output of validate_config().
        resolver: Metadata lookup, replaceable for testing.

    Returns:
        ConversionResult: Success or failure with run counters. Fatal
                          conversion and I/O errors are reported here, not
                          raised.
    """
    started = time.monotonic()
    extraction = ExtractionStats()
    emission = EmitterStats()

    input_path = cfg["input_path"]
    output_path = cfg["output_path"]
    root_path = cfg["root_path"]

    logger.info(f"Converting {_describe(input_path, 'stdin')} -> {_describe(output_path, 'stdout')}")
    logger.debug(f"Export root: {root_path} (order check: {cfg['order_check']})")

    try:
        if not is_stdio(output_path) and os.path.exists(output_path) and not cfg["overwrite"]:
            raise OutputExistsError(output_path)

        with open_input_stream(input_path) as src, \
                open_output_stream(output_path, overwrite=cfg["overwrite"]) as dst:
            convert_stream(
                stream_log_lines(src),
                dst,
                root_path,
                order_check=cfg["order_check"],
                resolver=resolver,
                extraction=extraction,
                emission=emission,
            )
    except (ConversionError, OSError) as e:
        elapsed = time.monotonic() - started
        logger.error(f"Conversion aborted after {extraction.lines_read} lines: {e}")
        return create_error_result(str(e), cfg, extraction, emission, elapsed)

    elapsed = time.monotonic() - started
    logger.info(
        f"Exported {emission.files_emitted} files in {emission.directories_opened} directories "
        f"from {extraction.lines_read} log lines ({elapsed:.2f}s)"
    )
    if emission.ordering_violations:
        logger.warning(
            f"{emission.ordering_violations} depth-first violation(s) were tolerated; "
            f"some directories appear more than once"
        )
    return create_success_result(cfg, extraction, emission, elapsed)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _describe(path: str, stdio_name: str) -> str:
    return stdio_name if is_stdio(path) else path
