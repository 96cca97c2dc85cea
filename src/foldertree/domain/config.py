from __future__ import annotations

"""
Configuration Domain Management.

Default runtime settings, JSON persistence in the user data directory and
validation/coercion of untrusted configuration input (CLI flags or a
hand-edited config file).
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from foldertree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
OUTPUT_FORMATS = ("tree", "json", "paths")


def get_config_path() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scanning
        "deep": False,
        "skip_vanished": True,

        # Materialization
        "dry_run": False,

        # Output
        "output_format": "tree",

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted configuration merged over the defaults.

    A missing, unreadable or corrupted file yields the defaults.

    Args:
        path: Config file location. Defaults to get_config_path().

    Returns:
        Dict[str, Any]: The configuration dictionary.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update({k: v for k, v in data.items() if k in config})
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist the configuration as JSON.

    Args:
        config: The configuration to save.
        path: Config file location. Defaults to get_config_path().

    Returns:
        bool: True on success.
    """
    config_path = path or get_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_config(config: Any, *, strict: bool = False) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Fills missing keys with defaults and coerces loosely typed values
    (e.g. "yes"/"0" booleans coming from text sources).

    Args:
        config: Raw configuration data.
        strict: Raise instead of coercing or falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.

    Raises:
        TypeError: strict mode and a value of the wrong type.
        ValueError: strict mode and an unknown output_format.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("deep", "skip_vanished", "dry_run"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("output_format", "log_level", "log_file"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    fmt = merged["output_format"].lower()
    if fmt not in OUTPUT_FORMATS:
        msg = f"Unknown output_format '{merged['output_format']}'; expected one of {', '.join(OUTPUT_FORMATS)}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using '{defaults['output_format']}'.")
        fmt = defaults["output_format"]
    merged["output_format"] = fmt
    merged["log_level"] = merged["log_level"].upper()

    return merged, warnings


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce common boolean spellings into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip() or fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
