from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (``wgslbundle <input_file> [output_file]``
plus tuning options) and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, NoReturn, Optional

from wgslbundle.domain.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_SCAN_WINDOW,
    RELATIVE_TO_CHOICES,
)
from wgslbundle.domain.errors import UsageError

# -----------------------------------------------------------------------------
# PARSER
# -----------------------------------------------------------------------------

class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with code 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{self.format_usage().rstrip()}\n{self.prog}: error: {message}")


def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the wgslbundle CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = _UsageParser(
        prog="wgslbundle",
        description=(
            "Flatten a tree of files joined by '#include \"path\"' directives "
            "into a single output, deepest includes first."
        ),
        epilog=(
            "Includes are only discovered at the head of each file: scanning stops "
            "after --scan-window consecutive lines without a directive, and any "
            "include placed after such a run is silently ignored."
        ),
    )

    # --- Path Management ---
    p.add_argument(
        "input_file",
        help="Root file. Relative paths resolve against the program's directory "
             "(see --relative-to).",
    )
    p.add_argument(
        "output_file",
        nargs="?",
        default=None,
        help="Destination file (created or truncated). Defaults to standard output.",
    )
    p.add_argument(
        "--relative-to",
        dest="relative_to",
        choices=RELATIVE_TO_CHOICES,
        default=None,
        help="Base for a relative input_file: 'program' (default) or 'cwd'.",
    )
    p.add_argument(
        "--encoding",
        default=None,
        help="Text encoding of the sources and of the output, file or standard output (default: utf-8).",
    )

    # --- Discovery Limits ---
    p.add_argument(
        "--scan-window",
        dest="scan_window",
        type=int,
        default=None,
        help=f"Consecutive non-include lines that end a file's scan (default: {DEFAULT_SCAN_WINDOW}).",
    )
    p.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help=f"Longest include chain before failing (default: {DEFAULT_MAX_DEPTH}).",
    )

    # --- Runtime Behaviour ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the emission order with depths instead of the bundled content.",
    )
    p.add_argument(
        "--lenient-exit",
        action="store_true",
        help="Exit with 0 even if an include could not be opened during discovery.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON config file merged under the command-line options.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any user config file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress (INFO) on the diagnostic stream.",
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
        help="Also write diagnostics to this rotating log file.",
    )

    return p


# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Options left unset map to None so they do not mask config file values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_file
    overrides["output_path"] = args.output_file
    overrides["relative_to"] = args.relative_to
    overrides["encoding"] = args.encoding
    overrides["scan_window"] = args.scan_window
    overrides["max_depth"] = args.max_depth

    if args.lenient_exit:
        overrides["lenient_exit"] = True

    return overrides


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``; raises UsageError on a malformed command line."""
    return build_parser().parse_args(argv)
