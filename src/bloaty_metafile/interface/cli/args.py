from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the pipeline.
"""

import argparse
from typing import Any, Dict

from bloaty_metafile.domain.constants import APP_NAME, APP_VERSION, DEFAULT_LOCK_FILE, DEFAULT_OUTPUT_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the bloaty-metafile CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Convert a 'bloaty -d sections,symbols --csv' report into an esbuild "
            "metafile attributed by crate and dependency chain."
        ),
    )

    # --- Input / Output ---
    p.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Bloaty CSV report. Reads standard input when omitted or '-'.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the metafile to this file instead of standard output.",
    )
    p.add_argument(
        "--name",
        dest="output_name",
        default=None,
        help=f"Name of the output entry in the metafile (default: {DEFAULT_OUTPUT_NAME}).",
    )

    # --- Attribution ---
    p.add_argument(
        "--lock",
        dest="lock_path",
        default=None,
        help=f"Path to Cargo.lock (default: ./{DEFAULT_LOCK_FILE}).",
    )
    p.add_argument(
        "--deep",
        dest="max_depth",
        type=int,
        default=None,
        help="Maximum depth of emitted paths; deeper nodes fold into their ancestor. 0 = unlimited.",
    )
    p.add_argument(
        "--no-sections",
        action="store_true",
        help="Drop symbols that cannot be attributed to a crate.",
    )

    # --- Formatting & Diagnostics ---
    p.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the generated JSON.",
    )
    p.add_argument(
        "--summary",
        action="store_true",
        help="Print attribution statistics to stderr.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write a rotating, timestamped log to this file.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the keys the user actually set.
    """
    overrides: Dict[str, Any] = {}

    if args.output_name is not None:
        overrides["output_name"] = args.output_name
    if args.lock_path is not None:
        overrides["lock_path"] = args.lock_path
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.no_sections:
        overrides["no_sections"] = True

    return overrides
