from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the configuration dictionary handed to the pipeline: fills
missing keys with domain defaults, coerces loosely typed values coming
from the CLI, and reports every correction as a warning.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

from bloaty_metafile.domain.config import get_default_config

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
    Validate and normalize a pipeline configuration.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
                                          list of warnings produced.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on a negative 'max_depth'.
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
    merged.update(config)

    for field in ("output_name", "lock_path"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["no_sections"] = _as_bool(
        merged.get("no_sections"), defaults["no_sections"], "no_sections", warnings, strict
    )
    merged["max_depth"] = _as_depth(
        merged.get("max_depth"), defaults["max_depth"], warnings, strict
    )

    merged["lock_path"] = os.path.abspath(os.path.expanduser(merged["lock_path"]))

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


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, int) and value in (0, 1):
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


def _as_depth(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Coerce 'max_depth' into a non-negative integer (0 = unbounded)."""
    if value is None:
        return fallback

    depth: Any = value
    if isinstance(value, str) and not strict:
        try:
            depth = int(value.strip())
            warnings.append(f"Field 'max_depth' converted from '{value}' to {depth}.")
        except ValueError:
            depth = value

    if isinstance(depth, bool) or not isinstance(depth, int):
        msg = f"Invalid field 'max_depth': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if depth < 0:
        msg = f"Invalid field 'max_depth': {depth} is negative."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using unbounded depth.")
        return 0

    return depth
