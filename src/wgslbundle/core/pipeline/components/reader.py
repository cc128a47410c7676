from __future__ import annotations

"""
Resilient File Reading Component.

Line streaming shared by the include scanner and the emitter. Undecodable
bytes never abort a read: the scanner replaces them, while the emitter
carries them through as lone surrogates (``surrogateescape``) so that the
destination, opened with the same handler, receives the original bytes.
"""

from typing import Iterator, TextIO

from wgslbundle.domain.constants import DEFAULT_ENCODING, SCAN_ERRORS

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def open_source(file_path: str, encoding: str = DEFAULT_ENCODING, errors: str = SCAN_ERRORS) -> TextIO:
    """
    Open a source file for text reading with universal newlines.

    Raises:
        OSError: If the file cannot be opened.
    """
    return open(file_path, "r", encoding=encoding, errors=errors)


def iter_lines(handle: TextIO) -> Iterator[str]:
    """Yield the lines of an open text stream without their terminator."""
    for line in handle:
        yield line.rstrip("\n")


def stream_file_content(
        file_path: str,
        encoding: str = DEFAULT_ENCODING,
        errors: str = SCAN_ERRORS,
) -> Iterator[str]:
    """
    Generate a line-by-line stream of file content.

    Line terminators are stripped (``\\n``, ``\\r\\n`` and ``\\r`` are all
    recognized). The file handle is released when the generator is exhausted
    or closed.

    Args:
        file_path: Path to the target file.
        encoding: Text encoding of the file.
        errors: Codec error handler for undecodable bytes.

    Yields:
        str: Lines without their terminator.

    Raises:
        OSError: On the first ``next()`` if the file cannot be opened.
    """
    with open_source(file_path, encoding, errors) as f:
        yield from iter_lines(f)
