from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (JSON file, CLI
overrides) and the bundle engine. Coerces types, enforces positive limits
and fills missing keys with domain defaults.
"""

import codecs
import logging
from typing import Any, Dict, List, Optional, Tuple

from wgslbundle.domain.config import get_default_config
from wgslbundle.domain.constants import RELATIVE_TO_CHOICES

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
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
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

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown config key '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    merged["input_path"] = _as_str(merged.get("input_path"), "", "input_path", warnings, strict)
    merged["encoding"] = _as_str(
        merged.get("encoding"), defaults["encoding"], "encoding", warnings, strict
    )
    try:
        codecs.lookup(merged["encoding"])
    except LookupError:
        msg = f"Invalid field 'encoding': unknown codec '{merged['encoding']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        merged["encoding"] = defaults["encoding"]

    merged["output_path"] = _as_optional_str(
        merged.get("output_path"), "output_path", warnings, strict
    )

    for field in ("scan_window", "max_depth"):
        merged[field] = _as_positive_int(
            merged.get(field), defaults[field], field, warnings, strict
        )

    merged["lenient_exit"] = _as_bool(
        merged.get("lenient_exit"), defaults["lenient_exit"], "lenient_exit", warnings, strict
    )

    relative_to = _as_str(
        merged.get("relative_to"), defaults["relative_to"], "relative_to", warnings, strict
    ).lower()
    if relative_to not in RELATIVE_TO_CHOICES:
        msg = f"Invalid field 'relative_to': expected one of {RELATIVE_TO_CHOICES}, received '{relative_to}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        relative_to = defaults["relative_to"]
    merged["relative_to"] = relative_to

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    if value is None:
        return None
    s = _as_str(value, "", field, warnings, strict)
    return s or None


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce numeric input into an integer >= 1."""
    if value is None:
        return fallback

    number: Optional[int] = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            number = int(s)

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < 1:
        msg = f"Invalid field '{field}': must be >= 1, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return number


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
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
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
