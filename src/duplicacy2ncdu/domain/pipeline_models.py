from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the counters gathered while streaming a log and the result object
handed from the conversion engine back to the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# RUNTIME COUNTERS
# -----------------------------------------------------------------------------

@dataclass
class ExtractionStats:
    """
    Mutable counters filled by the line extractor.

    Attributes:
        lines_read: Total input lines consumed.
        lines_matched: Lines matching the inclusion pattern.
        directories_skipped: Matches discarded as directory notices.
    """
    lines_read: int = 0
    lines_matched: int = 0
    directories_skipped: int = 0


@dataclass
class EmitterStats:
    """
    Mutable counters filled by the tree emitter.

    Attributes:
        files_emitted: Leaf info blocks written.
        directories_opened: Directory scopes opened below the root.
        max_depth: Deepest PathStack reached.
        ordering_violations: Depth-first violations tolerated in warn mode.
    """
    files_emitted: int = 0
    directories_opened: int = 0
    max_depth: int = 0
    ordering_violations: int = 0

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ConversionResult:
    """
    Unified result object of a complete conversion run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_path: Log source ('-' for stdin).
        output_path: Export destination ('-' for stdout).
        root_path: Absolute directory the export is rooted at.
        lines_read: Total input lines consumed.
        lines_matched: Lines matching the inclusion pattern.
        directories_skipped: Directory notices discarded.
        files_emitted: File entries written.
        directories_opened: Directory scopes written below the root.
        max_depth: Deepest directory nesting reached.
        ordering_violations: Tolerated depth-first violations.
        elapsed_seconds: Wall time of the run.
    """
    ok: bool
    error: str

    input_path: str
    output_path: str
    root_path: str

    lines_read: int = 0
    lines_matched: int = 0
    directories_skipped: int = 0
    files_emitted: int = 0
    directories_opened: int = 0
    max_depth: int = 0
    ordering_violations: int = 0

    elapsed_seconds: float = 0.0

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        cfg: Dict[str, Any],
        extraction: ExtractionStats,
        emission: EmitterStats,
        elapsed_seconds: float,
) -> ConversionResult:
    """
    Create a successful conversion result from the run counters.

    Args:
        cfg: The validated configuration used for the run.
        extraction: Counters from the line extractor.
        emission: Counters from the tree emitter.
        elapsed_seconds: Duration of the run.

    Returns:
        ConversionResult: An immutable success result object.
    """
    return ConversionResult(
        ok=True,
        error="",
        input_path=cfg["input_path"],
        output_path=cfg["output_path"],
        root_path=cfg["root_path"],
        lines_read=extraction.lines_read,
        lines_matched=extraction.lines_matched,
        directories_skipped=extraction.directories_skipped,
        files_emitted=emission.files_emitted,
        directories_opened=emission.directories_opened,
        max_depth=emission.max_depth,
        ordering_violations=emission.ordering_violations,
        elapsed_seconds=elapsed_seconds,
        summary={"order_check": cfg.get("order_check")},
    )


def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        extraction: Optional[ExtractionStats] = None,
        emission: Optional[EmitterStats] = None,
        elapsed_seconds: float = 0.0,
) -> ConversionResult:
    """
    Create a failed conversion result.

    Counters reflect progress up to the failure; the export written so far
    is incomplete and must not be consumed.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        extraction: Counters from the line extractor, if any.
        emission: Counters from the tree emitter, if any.
        elapsed_seconds: Duration until the failure.

    Returns:
        ConversionResult: An immutable error result object.
    """
    extraction = extraction or ExtractionStats()
    emission = emission or EmitterStats()
    return ConversionResult(
        ok=False,
        error=error,
        input_path=cfg.get("input_path", ""),
        output_path=cfg.get("output_path", ""),
        root_path=cfg.get("root_path", ""),
        lines_read=extraction.lines_read,
        lines_matched=extraction.lines_matched,
        directories_skipped=extraction.directories_skipped,
        files_emitted=emission.files_emitted,
        directories_opened=emission.directories_opened,
        max_depth=emission.max_depth,
        ordering_violations=emission.ordering_violations,
        elapsed_seconds=elapsed_seconds,
        summary={"order_check": cfg.get("order_check")},
    )
