from __future__ import annotations

"""
Include Graph Data Models.

Defines the per-file visit state machine, the depth map shared between the
walker and the emitter, and the immutable result objects handed back to the
interface layer.
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

# -----------------------------------------------------------------------------
# VISIT STATE
# -----------------------------------------------------------------------------

class VisitState(enum.Enum):
    """Lifecycle of a file identity during a single walk."""
    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class DepthMap:
    """
    File identity -> maximum include depth, plus the visit state of each file.

    Entries keep first-discovery order, which is the tie-breaker used when
    several files share a depth. A recorded depth only ever grows; the only
    way an entry shrinks is being discarded while a failed walk unwinds.
    """

    def __init__(self) -> None:
        self._depths: Dict[str, int] = {}
        self._states: Dict[str, VisitState] = {}

    def state(self, path: str) -> VisitState:
        return self._states.get(path, VisitState.UNVISITED)

    def depth(self, path: str) -> Optional[int]:
        return self._depths.get(path)

    def enter(self, path: str, depth: int) -> None:
        """Record ``depth`` and mark the file as being scanned."""
        previous = self._depths.get(path)
        if previous is not None and previous > depth:
            raise ValueError(f"Depth of {path} cannot decrease ({previous} -> {depth})")
        self._depths[path] = depth
        self._states[path] = VisitState.IN_PROGRESS

    def finish(self, path: str) -> None:
        self._states[path] = VisitState.DONE

    def discard(self, path: str) -> None:
        self._depths.pop(path, None)
        self._states.pop(path, None)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(list(self._depths.items()))

    def as_dict(self) -> Dict[str, int]:
        return dict(self._depths)

    def __contains__(self, path: object) -> bool:
        return path in self._depths

    def __len__(self) -> int:
        return len(self._depths)

    def __repr__(self) -> str:
        return f"DepthMap({self._depths!r})"


# -----------------------------------------------------------------------------
# SCAN MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IncludeDirective:
    """A well-formed ``#include "target"`` line found while scanning."""
    line_no: int
    target: str


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of scanning the head of one file for include directives.

    Attributes:
        path: File identity that was scanned.
        directives: Well-formed directives in file order.
        malformed: Number of directive lines missing their closing quote.
        lines_read: Lines consumed before EOF or the early-stop window.
        stopped_early: True if the scan window cut the read short.
    """
    path: str
    directives: List[IncludeDirective] = field(default_factory=list)
    malformed: int = 0
    lines_read: int = 0
    stopped_early: bool = False


# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WalkResult:
    """
    Result of discovering the include graph of a root file.

    Attributes:
        ok: False if an include could not be opened or the depth limit hit.
        error: Description of the failure, empty on success.
        failed_path: Identity of the file that caused the failure.
        depth_map: Final identity -> depth mapping (what remains after unwinding).
        scans: Number of file scans performed, re-scans included.
        warnings: Number of recoverable problems logged during the walk.
    """
    ok: bool
    error: str = ""
    failed_path: str = ""
    depth_map: Dict[str, int] = field(default_factory=dict)
    scans: int = 0
    warnings: int = 0


@dataclass(frozen=True)
class EmitResult:
    """Files written and skipped by the emission pass."""
    emitted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    lines_written: int = 0
    lines_dropped: int = 0


@dataclass(frozen=True)
class BundleResult:
    """
    Unified result of a complete bundle run.

    Attributes:
        ok: True if both discovery and output succeeded.
        error: Description of the first failure, empty on success.
        root: Canonical identity of the root file.
        output_path: Destination file, empty for standard output.
        order: Emission order as (identity, depth) pairs.
        walk: Discovery phase result.
        emit: Emission phase result, None when nothing was emitted.
        dry_run: True if the order was computed without emitting content.
    """
    ok: bool
    error: str
    root: str
    output_path: str
    order: List[Tuple[str, int]] = field(default_factory=list)
    walk: Optional[WalkResult] = None
    emit: Optional[EmitResult] = None
    dry_run: bool = False
