from __future__ import annotations

"""
Configuration Domain Management.

Default run settings and the optional JSON config file that can override
them. Nothing is written back: every invocation recomputes from scratch.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from wgslbundle.domain.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ENCODING,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SCAN_WINDOW,
)
from wgslbundle.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)


def get_config_path() -> str:
    """Location of the per-user config file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO Paths
        "input_path": "",
        "output_path": None,
        "relative_to": "program",
        "encoding": DEFAULT_ENCODING,

        # Discovery
        "scan_window": DEFAULT_SCAN_WINDOW,
        "max_depth": DEFAULT_MAX_DEPTH,

        # Exit policy
        "lenient_exit": False,
    }


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file merged over the defaults.

    Without an explicit path the per-user config file is used when present.
    Unknown keys are kept; the validator decides what to do with them.

    Args:
        path: Optional explicit config file.

    Returns:
        Dict[str, Any]: Merged configuration, defaults on any read failure.
    """
    defaults = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        if path:
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
        else:
            logger.debug("No user config file. Using defaults.")
        return defaults

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config {config_path}: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {config_path}. Using defaults.")
        return defaults

    defaults.update(data)
    logger.debug(f"Configuration loaded from {config_path}")
    return defaults
