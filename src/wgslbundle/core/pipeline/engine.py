from __future__ import annotations

"""
Core bundle pipeline.

Coordinates a complete run:
1. Validates configuration.
2. Resolves and canonicalizes the root file.
3. Walks the include graph into a depth map.
4. Derives the emission order.
5. Opens the destination and emits every file once (unless dry-run).

Discovery and emission are independent: a failed walk is reported, yet the
files that remain in the depth map are still emitted.
"""

import contextlib
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from wgslbundle.core.graph.ordering import emission_order, order_with_depths
from wgslbundle.core.graph.walker import IncludeWalker
from wgslbundle.core.pipeline.emitter import emit
from wgslbundle.core.pipeline.validator import validate_config
from wgslbundle.domain.errors import PathResolutionError
from wgslbundle.domain.graph_models import BundleResult, WalkResult
from wgslbundle.infra.fs import open_output, resolve_input_path

logger = logging.getLogger(__name__)


def run_bundle(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        argv0: Optional[str] = None,
) -> BundleResult:
    """
    Execute the full discovery and emission pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, compute the emission order without writing content.
        argv0: Program path used to resolve a relative input file; defaults
            to ``sys.argv[0]``.

    Returns:
        BundleResult: Status, emission order and per-phase results.
    """
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    output_path = cfg["output_path"] or ""

    # -------------------------------------------------------------------------
    # 1) Root resolution
    # -------------------------------------------------------------------------
    if not cfg["input_path"]:
        msg = "No input file given."
        logger.error(msg)
        return BundleResult(ok=False, error=msg, root="", output_path=output_path)

    try:
        root = resolve_input_path(cfg["input_path"], cfg["relative_to"], argv0)
    except PathResolutionError as e:
        msg = f"Error resolving canonical path for initial input file: {cfg['input_path']}"
        logger.error(f"{msg} ({e.reason})")
        return BundleResult(ok=False, error=msg, root="", output_path=output_path)

    logger.info(f"Bundling {root}")

    # -------------------------------------------------------------------------
    # 2) Discovery
    # -------------------------------------------------------------------------
    walker = IncludeWalker(
        scan_window=cfg["scan_window"],
        max_depth=cfg["max_depth"],
        encoding=cfg["encoding"],
    )
    walk = walker.walk(root, os.path.dirname(root))

    if not walk.ok:
        logger.error(f"Include discovery failed: {walk.error}")

    order = order_with_depths(walk.depth_map)
    walk_ok = walk.ok or cfg["lenient_exit"]

    if dry_run:
        return BundleResult(
            ok=walk_ok,
            error=walk.error,
            root=root,
            output_path=output_path,
            order=order,
            walk=walk,
            dry_run=True,
        )

    # -------------------------------------------------------------------------
    # 3) Emission
    # -------------------------------------------------------------------------
    try:
        with contextlib.ExitStack() as stack:
            try:
                out = stack.enter_context(open_output(cfg["output_path"], cfg["encoding"]))
            except OSError as e:
                msg = f"Could not open output file: {output_path} ({e.strerror or e})"
                logger.error(msg)
                return _output_failure(msg, root, output_path, order, walk)
            emitted = emit(emission_order(order), out, cfg["encoding"])
    except OSError as e:
        msg = f"Could not write output file: {output_path or '<stdout>'} ({e.strerror or e})"
        logger.error(msg)
        return _output_failure(msg, root, output_path, order, walk)

    if emitted.skipped:
        logger.warning(f"{len(emitted.skipped)} file(s) left out of the bundle")

    logger.info(
        f"Bundle complete: {len(emitted.emitted)} file(s), {emitted.lines_written} line(s) written"
    )

    return BundleResult(
        ok=walk_ok,
        error=walk.error,
        root=root,
        output_path=output_path,
        order=order,
        walk=walk,
        emit=emitted,
    )


def _output_failure(
        msg: str,
        root: str,
        output_path: str,
        order: List[Tuple[str, int]],
        walk: WalkResult,
) -> BundleResult:
    return BundleResult(
        ok=False,
        error=msg,
        root=root,
        output_path=output_path,
        order=order,
        walk=walk,
    )
