from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Reads the size report from a file or standard input and writes the
generated metafile. Path handling expands '~' and environment variables
the same way for every entry point.
"""

import logging
import os
import sys
from typing import Optional, TextIO

from bloaty_metafile.domain.constants import STDIN_SOURCE
from bloaty_metafile.domain.errors import InputMalformedError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def is_stdin(path: Optional[str]) -> bool:
    return not path or path.strip() == "-"


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion and '~'. Reverts to fallback if
    the input is empty.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# I/O API
# -----------------------------------------------------------------------------

def read_input_text(path: Optional[str], stdin: Optional[TextIO] = None) -> str:
    """
    Read the whole size report.

    Args:
        path: Report location; None or '-' reads standard input.
        stdin: Stream used instead of sys.stdin (for tests).

    Returns:
        str: Report text.

    Raises:
        InputMalformedError: If the source cannot be read or decoded.
    """
    if is_stdin(path):
        stream = stdin if stdin is not None else sys.stdin
        try:
            return stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputMalformedError(STDIN_SOURCE, f"failed to read: {e}") from e

    full = normalize_path(path, os.getcwd())
    try:
        with open(full, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputMalformedError(full, f"failed to read: {e}") from e


def write_output_text(path: str, text: str) -> str:
    """
    Persist the metafile, creating parent directories as needed.

    Returns:
        str: Absolute path written.
    """
    full = normalize_path(path, os.getcwd())
    out_dir = os.path.dirname(full)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(full, "w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")
    logger.info(f"Metafile written to: {full}")
    return full
