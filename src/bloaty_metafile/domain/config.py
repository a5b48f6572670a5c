from __future__ import annotations

"""
Configuration Domain Defaults.

Provides the default runtime configuration consumed by the pipeline. The
lock path is resolved against the caller's working directory here, once,
so the core never reaches for process-wide state on its own.
"""

import os
from typing import Any, Dict, Optional

from bloaty_metafile.domain.constants import DEFAULT_LOCK_FILE, DEFAULT_OUTPUT_NAME

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config(cwd: Optional[str] = None) -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Args:
        cwd: Directory used to resolve the default Cargo.lock location.
             Defaults to the current working directory.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = cwd or os.getcwd()
    return {
        # Output
        "output_name": DEFAULT_OUTPUT_NAME,
        "max_depth": 0,
        "no_sections": False,

        # Dependency attribution
        "lock_path": os.path.join(base, DEFAULT_LOCK_FILE),
    }
