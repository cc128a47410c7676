from __future__ import annotations

"""
Fatal error types raised before or outside the include walk.

Recoverable conditions (malformed directives, unresolved include paths,
unreadable files during emission) are logged and reported through the
result models instead. Destination failures are fatal for the emission
pass and surface as ``OutputWriteError``.
"""


class UsageError(Exception):
    """Wrong number of arguments or an invalid option value."""


class OutputWriteError(OSError):
    """The bundle destination rejected a write (broken pipe, full disk)."""


class PathResolutionError(OSError):
    """A path could not be canonicalized."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"Cannot resolve canonical path for '{path}': {reason}".rstrip(": "))
        self.path = path
        self.reason = reason
