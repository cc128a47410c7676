from __future__ import annotations

"""
Include Graph Walker.

Discovers every file transitively included by a root file and records the
deepest include depth at which each one was reached. Traversal is a
depth-first walk driven by an explicit stack of frames, so the include
chain length is bounded by ``max_depth`` rather than by the interpreter's
recursion limit.

Revisit rules for a file reached at depth ``d``:

- never seen: record ``d`` and scan it;
- currently being scanned (an ancestor on the active chain): circular
  include, logged and ignored;
- finished at a depth ``>= d``: nothing to do;
- finished at a shallower depth: raise the record to ``d`` and scan again,
  so that everything below it is pushed deeper as well.

An include that cannot be opened fails the walk. The failing file and every
file on the active chain above it are removed from the depth map.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from wgslbundle.core.graph.scanner import scan_includes
from wgslbundle.domain.constants import DEFAULT_ENCODING, DEFAULT_MAX_DEPTH, DEFAULT_SCAN_WINDOW
from wgslbundle.domain.errors import PathResolutionError
from wgslbundle.domain.graph_models import DepthMap, IncludeDirective, VisitState, WalkResult
from wgslbundle.infra.fs import canonicalize

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    path: str
    depth: int
    base_dir: str
    pending: Iterator[IncludeDirective]


class _WalkFailure(Exception):
    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


class IncludeWalker:
    """
    Driver for include discovery. Counters are reset at the start of each walk.

    Args:
        scan_window: Consecutive non-directive lines after which a file's
            scan stops.
        max_depth: Deepest include chain accepted before the walk fails.
        encoding: Text encoding used to read sources.
    """

    def __init__(
            self,
            scan_window: int = DEFAULT_SCAN_WINDOW,
            max_depth: int = DEFAULT_MAX_DEPTH,
            encoding: str = DEFAULT_ENCODING,
    ) -> None:
        if scan_window < 1:
            raise ValueError("scan_window must be >= 1")
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.scan_window = scan_window
        self.max_depth = max_depth
        self.encoding = encoding
        self._scans = 0
        self._warnings = 0

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def walk(self, root: str, base_dir: Optional[str] = None) -> WalkResult:
        """
        Discover the include graph below ``root``.

        Args:
            root: Canonical identity of the root file (depth 0).
            base_dir: Directory the root's own includes resolve against,
                the root's parent directory by default.

        Returns:
            WalkResult: Final depth map and failure details, if any.
        """
        depth_map = DepthMap()
        ok, error, failed_path, scans, warnings = self._run(root, base_dir, depth_map, 0)
        logger.debug(f"Walk of {root} finished: {len(depth_map)} file(s), {scans} scan(s)")
        return WalkResult(
            ok=ok,
            error=error,
            failed_path=failed_path,
            depth_map=depth_map.as_dict(),
            scans=scans,
            warnings=warnings,
        )

    def visit(self, path: str, base_dir: Optional[str], depth_map: DepthMap, depth: int) -> bool:
        """
        Visit ``path`` at ``depth`` against an existing depth map.

        The map is mutated in place. Returns False if the visit, or any
        include below it, failed.
        """
        ok, _, _, _, _ = self._run(path, base_dir, depth_map, depth)
        return ok

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def _run(
            self,
            start: str,
            base_dir: Optional[str],
            depth_map: DepthMap,
            start_depth: int,
    ) -> Tuple[bool, str, str, int, int]:
        stack: List[_Frame] = []
        self._scans = 0
        self._warnings = 0

        try:
            frame = self._open_frame(start, base_dir, depth_map, start_depth)
            if frame:
                stack.append(frame)

            while stack:
                top = stack[-1]
                directive = next(top.pending, None)
                if directive is None:
                    depth_map.finish(top.path)
                    stack.pop()
                    continue

                child = self._resolve(top.base_dir, directive.target)
                frame = self._open_frame(child, None, depth_map, top.depth + 1, parent=top.path)
                if frame:
                    stack.append(frame)

        except _WalkFailure as failure:
            for frame in reversed(stack):
                depth_map.discard(frame.path)
            return False, failure.message, failure.path, self._scans, self._warnings

        return True, "", "", self._scans, self._warnings

    def _open_frame(
            self,
            path: str,
            base_dir: Optional[str],
            depth_map: DepthMap,
            depth: int,
            parent: str = "",
    ) -> Optional[_Frame]:
        """Apply the revisit rules and scan ``path`` if it needs (re)scanning."""
        state = depth_map.state(path)

        if state is VisitState.IN_PROGRESS:
            self._warnings += 1
            logger.warning(f"Circular include ignored: {parent or '<root>'} -> {path}")
            return None

        recorded = depth_map.depth(path)
        if state is VisitState.DONE and recorded is not None and recorded >= depth:
            logger.debug(f"Skipping {path}: already explored at depth {recorded} >= {depth}")
            return None

        if depth > self.max_depth:
            depth_map.discard(path)
            msg = f"Include depth exceeded ({depth} > {self.max_depth}) at {path}"
            logger.error(msg)
            raise _WalkFailure(path, msg)

        if recorded is not None:
            logger.debug(f"Re-scanning {path}: depth raised {recorded} -> {depth}")
        depth_map.enter(path, depth)

        try:
            scan = scan_includes(path, self.scan_window, self.encoding)
        except OSError as e:
            depth_map.discard(path)
            msg = f"Could not open file: {path} ({e.strerror or e})"
            logger.error(msg)
            raise _WalkFailure(path, msg) from e

        self._scans += 1
        self._warnings += scan.malformed

        return _Frame(
            path=path,
            depth=depth,
            base_dir=base_dir if base_dir is not None else os.path.dirname(path),
            pending=iter(scan.directives),
        )

    def _resolve(self, base_dir: str, target: str) -> str:
        """Join an include target to ``base_dir`` and canonicalize it."""
        joined = os.path.join(base_dir, target)
        try:
            return canonicalize(joined)
        except PathResolutionError as e:
            self._warnings += 1
            logger.warning(f"Error resolving canonical path for included file: {joined} ({e.reason})")
            return joined


def walk_includes(
        root: str,
        *,
        base_dir: Optional[str] = None,
        scan_window: int = DEFAULT_SCAN_WINDOW,
        max_depth: int = DEFAULT_MAX_DEPTH,
        encoding: str = DEFAULT_ENCODING,
) -> WalkResult:
    """Convenience wrapper around :meth:`IncludeWalker.walk`."""
    walker = IncludeWalker(scan_window=scan_window, max_depth=max_depth, encoding=encoding)
    return walker.walk(root, base_dir)
