from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults plus CLI overrides), report reading, pipeline
execution and metafile output.
"""

import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from bloaty_metafile.core.pipeline.engine import run_pipeline
from bloaty_metafile.core.pipeline.validator import validate_config
from bloaty_metafile.domain.config import get_default_config
from bloaty_metafile.domain.constants import STDIN_SOURCE
from bloaty_metafile.domain.errors import BloatyError
from bloaty_metafile.infra.fs import is_stdin, normalize_path, read_input_text, write_output_text
from bloaty_metafile.infra.logging import LoggingConfig, configure_logging, get_logger
from bloaty_metafile.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        stdin: Report stream used when no input path is given.
        stdout: Stream receiving the metafile when no output path is given.

    Returns:
        int: 0 on success, 1 on pipeline failure, 2 when the input file
             does not exist, 130 when interrupted.
    """
    out = stdout if stdout is not None else sys.stdout

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional trace file)
    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    # 3. Configuration: defaults resolved against the working directory
    raw_conf = _merge_config(get_default_config(os.getcwd()), cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Pre-flight input verification
    if is_stdin(args.input):
        source = STDIN_SOURCE
    else:
        source = normalize_path(args.input, os.getcwd())
        if not os.path.isfile(source):
            msg = f"Input file does not exist: {source}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2

    # 5. Pipeline execution phase
    logger.debug(f"Reading size report from: {source}")
    try:
        csv_text = read_input_text(args.input, stdin=stdin)
        result = run_pipeline(
            csv_text,
            clean_conf,
            source=source,
            indent=2 if args.pretty else None,
        )
        if args.output_path:
            write_output_text(args.output_path, result.json_text)
        else:
            out.write(result.json_text)
            out.write("\n")
            out.flush()
    except KeyboardInterrupt:
        logger.warning("Execution interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except BloatyError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.critical(f"Failed to write metafile: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.summary:
        _print_human_summary(result.summary)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys into the base configuration.
    """
    out = dict(base)
    for k in ("output_name", "lock_path", "max_depth", "no_sections"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(summary: Dict[str, Any]) -> None:
    """Render the attribution statistics on stderr."""
    labels = {
        "records": "Records read",
        "classified": "Attributed to crates",
        "unclassified": "Unclassified (SECTIONS)",
        "skipped": "Dropped (--no-sections)",
        "owners": "Distinct crates",
        "inputs": "Metafile inputs",
        "total_filesize": "Total file size",
    }
    for key, label in labels.items():
        if key in summary:
            print(f"{label}: {summary[key]:,}", file=sys.stderr)

    if not summary.get("dependency_graph"):
        print("Dependency chains: unavailable (no Cargo.lock)", file=sys.stderr)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
