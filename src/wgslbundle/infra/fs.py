from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path canonicalization, program-relative resolution and output stream
acquisition. Every file identity used by the include walker is produced
here, so two spellings of the same on-disk file collapse to one key.
"""

import contextlib
import os
import sys
from typing import Iterator, Optional, TextIO

from wgslbundle.domain.constants import COPY_ERRORS, DEFAULT_ENCODING
from wgslbundle.domain.errors import PathResolutionError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "wgslbundle"
UNIX_APP_DIR_NAME = ".wgslbundle"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory holding the persistent user config.

    Standards:
    - Windows: %LOCALAPPDATA%/wgslbundle
    - Linux/Mac: ~/.wgslbundle

    The directory is not created; it only needs to exist when a user has
    written a config file there.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def program_dir(argv0: Optional[str] = None) -> str:
    """Directory containing the running program (``argv[0]``)."""
    exe = argv0 if argv0 is not None else sys.argv[0]
    return os.path.dirname(os.path.abspath(exe))


def canonicalize(path: str) -> str:
    """
    Return the canonical identity of an existing file.

    Absolute, symlink-free and without ``.``/``..`` segments.

    Raises:
        PathResolutionError: If the path does not exist or cannot be resolved.
    """
    try:
        return os.path.realpath(path, strict=True)
    except (OSError, ValueError) as e:
        raise PathResolutionError(path, str(e)) from e


def resolve_input_path(raw: str, relative_to: str = "program", argv0: Optional[str] = None) -> str:
    """
    Resolve the root input file and canonicalize it.

    Relative paths are joined to the program's own directory by default,
    or to the working directory when ``relative_to`` is ``"cwd"``. An
    absolute path is kept as given.

    Raises:
        PathResolutionError: If the resulting path cannot be canonicalized.
    """
    expanded = os.path.expanduser(raw)
    base = os.getcwd() if relative_to == "cwd" else program_dir(argv0)
    return canonicalize(os.path.join(base, expanded))


# -----------------------------------------------------------------------------
# OUTPUT STREAMS
# -----------------------------------------------------------------------------

@contextlib.contextmanager
def open_output(
        path: Optional[str],
        encoding: str = DEFAULT_ENCODING,
        errors: str = COPY_ERRORS,
) -> Iterator[TextIO]:
    """
    Yield the output destination: the given file (truncated) or stdout.

    Both destinations use ``encoding`` and the ``errors`` handler, so source
    bytes decoded with ``surrogateescape`` are written back unchanged.
    Standard output is reconfigured for the duration of the block, restored
    afterwards and never closed by this helper.

    Raises:
        OSError: If the output file cannot be opened for writing.
    """
    if not path:
        with _reconfigured_stdout(encoding, errors) as stdout:
            yield stdout
        return

    with open(path, "w", encoding=encoding, errors=errors) as out:
        yield out


@contextlib.contextmanager
def _reconfigured_stdout(encoding: str, errors: str) -> Iterator[TextIO]:
    stream = sys.stdout
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is None:
        # Replaced stream (e.g. StringIO): written as is
        yield stream
        stream.flush()
        return

    stream.flush()
    previous = (stream.encoding, stream.errors)
    reconfigure(encoding=encoding, errors=errors)
    try:
        yield stream
    finally:
        stream.flush()
        reconfigure(encoding=previous[0], errors=previous[1])
