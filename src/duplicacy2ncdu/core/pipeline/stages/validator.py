from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the conversion engine: coerces untrusted values coming from
the CLI or the persisted config file into a strictly typed dictionary,
normalizes paths and injects defaults for anything missing.
"""

import logging
from typing import Any, Dict, List, Tuple

from duplicacy2ncdu.domain.config import get_default_config
from duplicacy2ncdu.domain.constants import ORDER_CHECK_MODES
from duplicacy2ncdu.infra.fs import normalize_path
from duplicacy2ncdu.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of
                falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an unknown enumerated value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    # 1. Strings
    for key in ("input_path", "output_path", "root_path", "log_file", "log_level", "order_check"):
        value = merged.get(key)
        if not isinstance(value, str):
            _reject(f"'{key}' must be a string, got {type(value).__name__}.",
                    strict, warnings, TypeError)
            merged[key] = defaults[key]

    # 2. Booleans
    for key in ("overwrite",):
        value = merged.get(key)
        if not isinstance(value, bool):
            _reject(f"'{key}' must be a boolean, got {type(value).__name__}.",
                    strict, warnings, TypeError)
            merged[key] = defaults[key]

    # 3. Enumerations
    order_check = merged["order_check"].strip().lower()
    if order_check not in ORDER_CHECK_MODES:
        _reject(f"Unknown order_check '{merged['order_check']}'. Using '{defaults['order_check']}'.",
                strict, warnings, ValueError)
        order_check = defaults["order_check"]
    merged["order_check"] = order_check

    log_level = merged["log_level"].strip().upper()
    if log_level not in _LEVEL_MAP:
        _reject(f"Unknown log_level '{merged['log_level']}'. Using '{defaults['log_level']}'.",
                strict, warnings, ValueError)
        log_level = defaults["log_level"]
    merged["log_level"] = log_level

    # 4. Paths
    merged["input_path"] = normalize_path(merged["input_path"], defaults["input_path"])
    merged["output_path"] = normalize_path(merged["output_path"], defaults["output_path"])
    merged["root_path"] = normalize_path(merged["root_path"], defaults["root_path"])
    if merged["log_file"].strip():
        merged["log_file"] = normalize_path(merged["log_file"], "")
    else:
        merged["log_file"] = ""

    # Unknown keys are dropped to keep the schema closed
    clean = {k: merged[k] for k in defaults}
    for key in sorted(set(merged) - set(defaults)):
        warnings.append(f"Ignoring unknown config key '{key}'.")

    return clean, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _reject(msg: str, strict: bool, warnings: List[str], exc_type: type) -> None:
    if strict:
        raise exc_type(msg)
    warnings.append(msg)
    logger.warning(msg)
