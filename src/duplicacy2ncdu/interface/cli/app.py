from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration resolution
(defaults, saved preferences, CLI overrides), logging bootstrap, conversion
and result reporting. Every human-readable message goes to stderr because
stdout may carry the export itself.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from duplicacy2ncdu.core.pipeline.engine import run_conversion
from duplicacy2ncdu.core.pipeline.stages.validator import validate_config
from duplicacy2ncdu.domain.config import get_default_config, load_config, save_config
from duplicacy2ncdu.domain.pipeline_models import ConversionResult
from duplicacy2ncdu.infra.fs import is_stdio
from duplicacy2ncdu.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
    shutdown_logging,
)
from duplicacy2ncdu.interface.cli import args as cli_args
from duplicacy2ncdu.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 conversion failure, 2 bad
             input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve base configuration (defaults vs saved preferences)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 2. Merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)
    if raw_conf.get("log_file") == cli_args.DEFAULT_LOG_FILE and args.log_file is not None:
        raw_conf["log_file"] = get_default_log_path()

    # 3. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 4. Logging bootstrap (stderr, optional rotating file)
    configure_logging(
        LoggingConfig(level=clean_conf["log_level"], console=True, log_file=clean_conf["log_file"] or None),
        force=True,
    )
    try:
        return _run(args, clean_conf, warnings)
    finally:
        shutdown_logging()


def _run(args: Any, conf: Dict[str, Any], warnings: List[str]) -> int:
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        path = save_config(conf)
        print(i18n.t("cli.status.saved", path=path), file=sys.stderr)

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # Pre-flight verification
    input_path = conf["input_path"]
    if not is_stdio(input_path) and (not os.path.exists(input_path) or os.path.isdir(input_path)):
        msg = i18n.t("cli.errors.path_not_exist", path=input_path)
        logger.error(msg)
        return EXIT_USAGE

    if not os.path.isdir(conf["root_path"]):
        msg = i18n.t("cli.errors.root_not_dir", path=conf["root_path"])
        logger.error(msg)
        return EXIT_USAGE

    try:
        result = run_conversion(conf)
    except KeyboardInterrupt:
        logger.warning(i18n.t("cli.status.interrupted"))
        return EXIT_INTERRUPTED

    _report(result)
    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a non-None value are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in base:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _report(result: ConversionResult) -> None:
    """Log the outcome of a conversion in human-readable form."""
    if not result.ok:
        logger.error(i18n.t("cli.errors.conversion_fail", error=result.error))
        return

    if not is_stdio(result.output_path):
        logger.info(i18n.t("cli.status.success", path=result.output_path))
    logger.info(i18n.t(
        "cli.status.summary",
        files=result.files_emitted,
        dirs=result.directories_opened,
        lines=result.lines_read,
        matched=result.lines_matched,
        skipped=result.directories_skipped,
    ))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
