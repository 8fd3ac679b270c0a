from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides for the domain layer.
"""

import argparse
from typing import Any, Dict

from duplicacy2ncdu.domain.constants import ORDER_CHECK_MODES, PROGNAME, PROGVER
from duplicacy2ncdu.utils.i18n import i18n

# Sentinel stored when --log-file is given without a path
DEFAULT_LOG_FILE = ""

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the duplicacy2ncdu CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=PROGNAME,
        description=i18n.t("app.description"),
        epilog=i18n.t("app.epilog"),
    )

    # --- Streams ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help=i18n.t("cli.args.input"),
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help=i18n.t("cli.args.output"),
    )
    p.add_argument(
        "-r", "--root",
        dest="root_path",
        default=None,
        help=i18n.t("cli.args.root"),
    )
    p.add_argument(
        "--overwrite",
        action="store_true",
        help=i18n.t("cli.args.overwrite"),
    )

    # --- Tree Reconstruction ---
    p.add_argument(
        "--order-check",
        dest="order_check",
        choices=ORDER_CHECK_MODES,
        default=None,
        help=i18n.t("cli.args.order_check"),
    )

    # --- Diagnostics ---
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const=DEFAULT_LOG_FILE,
        default=None,
        help=i18n.t("cli.args.log_file"),
    )
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    verbosity.add_argument("-q", "--quiet", action="store_true", help=i18n.t("cli.args.quiet"))

    # --- Configuration Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=i18n.t("cli.args.save"),
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {PROGVER}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Options that were not given map to None and are ignored by the merge.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "output_path": args.output_path,
        "root_path": args.root_path,
        "order_check": args.order_check,
        "log_file": args.log_file,
        "overwrite": True if args.overwrite else None,
        "log_level": None,
    }

    if args.debug:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "WARNING"

    return overrides
