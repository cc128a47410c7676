from __future__ import annotations

"""
Output Line Filtering and Persistence.

Writes a file's lines to the bundle destination, dropping every line that
mentions the include marker anywhere. This filter is intentionally broader
than the directive grammar used during discovery: commented-out or indented
includes disappear from the output too.
"""

from typing import Iterable, TextIO, Tuple

from wgslbundle.domain.constants import INCLUDE_MARKER
from wgslbundle.domain.errors import OutputWriteError


def keep_line(line: str) -> bool:
    """True if ``line`` belongs in the bundled output."""
    return INCLUDE_MARKER not in line


def write_filtered(lines: Iterable[str], out: TextIO) -> Tuple[int, int]:
    """
    Copy lines to ``out``, one per output line, skipping include mentions.

    Args:
        lines: Source lines without terminators.
        out: Text stream opened with platform newline translation.

    Returns:
        Tuple[int, int]: (lines written, lines dropped).

    Raises:
        OutputWriteError: If ``out`` rejects a write. Errors raised while
            pulling from ``lines`` propagate unchanged.
    """
    written = 0
    dropped = 0
    for line in lines:
        if not keep_line(line):
            dropped += 1
            continue
        try:
            out.write(f"{line}\n")
        except OSError as e:
            raise OutputWriteError(e.errno, e.strerror or str(e)) from e
        written += 1
    return written, dropped
