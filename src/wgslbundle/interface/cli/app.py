from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, config file, CLI overrides), pipeline execution and exit code
selection. Standard output carries the bundle itself, so every status
message goes to the diagnostic stream (stderr) instead.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from wgslbundle.core.pipeline.engine import run_bundle
from wgslbundle.core.pipeline.validator import validate_config
from wgslbundle.domain.config import get_default_config, load_config
from wgslbundle.domain.errors import UsageError
from wgslbundle.domain.graph_models import BundleResult
from wgslbundle.infra.fs import normalize_path
from wgslbundle.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from wgslbundle.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    try:
        args = cli_args.parse_args(argv)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE

    # 2. Logging bootstrap (diagnostic stream on stderr)
    if args.debug:
        log_level = "DEBUG"
    elif args.verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"
    log_file = normalize_path(args.log_file, fallback="") if args.log_file else None
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults vs config file)
    config_path = normalize_path(args.config_path, fallback="") if args.config_path else None
    if args.use_defaults and not config_path:
        base_conf = get_default_config()
    else:
        base_conf = load_config(config_path)

    # 4. Merge command-line overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 5. Pipeline execution phase
    try:
        result = run_bundle(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return EXIT_INTERRUPTED

    # 6. Output rendering phase
    if result.dry_run:
        _print_order(result)

    if result.walk is None:
        # Root could not be resolved or no input given
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK if result.ok else EXIT_FAILURE


# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of non-None override values into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_order(result: BundleResult) -> None:
    """Write the emission order as ``depth<TAB>path`` lines to stdout."""
    for path, depth in result.order:
        print(f"{depth}\t{path}")


if __name__ == "__main__":
    sys.exit(main())
