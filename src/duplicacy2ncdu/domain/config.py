from __future__ import annotations

"""
Configuration Domain Management.

Handles the session configuration of a conversion run and its optional
persistence as JSON in the user data directory. Loading never fails: a
missing or corrupted file falls back to the defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from duplicacy2ncdu.domain.constants import (
    CURRENT_CONFIG_VERSION,
    ORDER_CHECK_STRICT,
    STDIO_MARKER,
)
from duplicacy2ncdu.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")

# Keys persisted by save_config; paths are per-run and never stored
PERSISTENT_KEYS = ("order_check", "overwrite", "log_level", "log_file")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO
        "input_path": STDIO_MARKER,
        "output_path": STDIO_MARKER,
        "root_path": os.getcwd(),
        "overwrite": False,

        # Tree reconstruction
        "order_check": ORDER_CHECK_STRICT,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the configuration, overlaying persisted preferences on the defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    preferences = data.get("preferences", {})
    if isinstance(preferences, dict):
        for key in PERSISTENT_KEYS:
            if key in preferences:
                config[key] = preferences[key]

    return config


def save_config(config: Dict[str, Any]) -> str:
    """
    Persist the user preferences of a configuration to disk.

    Args:
        config: A validated configuration dictionary.

    Returns:
        str: Path of the written config file.

    Raises:
        OSError: If the file cannot be written.
    """
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "preferences": {k: config[k] for k in PERSISTENT_KEYS if k in config},
    }
    os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(state, f, ensure_ascii=False, indent=4)
    logger.info(f"Preferences saved to {CONFIG_FILE}")
    return CONFIG_FILE
