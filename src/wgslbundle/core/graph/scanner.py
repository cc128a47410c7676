from __future__ import annotations

"""
Include Directive Scanner.

Recognizes ``#include "path"`` lines at the head of a file. Only the
leading block of a file is examined: the scan stops after a configurable
run of consecutive non-directive lines, so includes placed further down are
never discovered.
"""

import contextlib
import logging
from typing import List, Optional, Tuple

from wgslbundle.core.pipeline.components.reader import stream_file_content
from wgslbundle.domain.constants import DEFAULT_ENCODING, DEFAULT_SCAN_WINDOW, INCLUDE_PREFIX
from wgslbundle.domain.graph_models import IncludeDirective, ScanResult

logger = logging.getLogger(__name__)


def parse_directive(line: str) -> Tuple[bool, Optional[str]]:
    """
    Match a single line against the include directive grammar.

    The line must start with ``#include "`` exactly (no leading whitespace);
    the target is everything up to the next double quote.

    Returns:
        Tuple[bool, Optional[str]]:
            ``(False, None)`` if the line is not a directive,
            ``(True, None)`` if it is a directive without a closing quote,
            ``(True, target)`` otherwise.
    """
    if not line.startswith(INCLUDE_PREFIX):
        return False, None

    start = len(INCLUDE_PREFIX)
    end = line.find('"', start)
    if end == -1:
        return True, None
    return True, line[start:end]


def scan_includes(
        file_path: str,
        scan_window: int = DEFAULT_SCAN_WINDOW,
        encoding: str = DEFAULT_ENCODING,
) -> ScanResult:
    """
    Collect the include directives at the head of a file.

    A counter of consecutive non-directive lines is reset on every
    well-formed directive; once it reaches ``scan_window`` no further line
    is examined. Malformed directives are logged and leave the counter
    untouched. The file is closed before this function returns.

    Args:
        file_path: File identity to scan.
        scan_window: Consecutive non-directive lines that end the scan.
        encoding: Text encoding of the file.

    Returns:
        ScanResult: Directives in file order plus scan statistics.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    directives: List[IncludeDirective] = []
    malformed = 0
    misses = 0
    lines_read = 0
    stopped_early = False

    with contextlib.closing(stream_file_content(file_path, encoding)) as lines:
        for line_no, line in enumerate(lines, start=1):
            if misses >= scan_window:
                stopped_early = True
                break
            lines_read = line_no

            is_directive, target = parse_directive(line)
            if not is_directive:
                misses += 1
                continue

            if target is None:
                malformed += 1
                logger.warning(f"Malformed #include directive in {file_path}:{line_no}: {line}")
                continue

            directives.append(IncludeDirective(line_no=line_no, target=target))
            misses = 0

    if stopped_early:
        logger.debug(
            f"Scan of {file_path} stopped after line {lines_read}: "
            f"{scan_window} consecutive lines without an include"
        )

    return ScanResult(
        path=file_path,
        directives=directives,
        malformed=malformed,
        lines_read=lines_read,
        stopped_early=stopped_early,
    )
