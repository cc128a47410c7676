from __future__ import annotations

"""
Domain Constants.

Directive markers and default limits shared by the walker, the emitter
and the configuration layer.
"""

# Prefix a line must start with (no leading whitespace) to be an include
INCLUDE_PREFIX = '#include "'

# Any line containing this marker is dropped from the bundled output
INCLUDE_MARKER = "#include"

# Consecutive non-directive lines after which a file's scan stops.
# Includes placed after such a run are silently missed.
DEFAULT_SCAN_WINDOW = 5

# Longest include chain accepted before the walk fails
DEFAULT_MAX_DEPTH = 256

DEFAULT_ENCODING = "utf-8"

# Codec error handlers: discovery only inspects directives, while the
# bundle must reproduce source bytes unchanged
SCAN_ERRORS = "replace"
COPY_ERRORS = "surrogateescape"

RELATIVE_TO_CHOICES = ("program", "cwd")

CONFIG_FILE_NAME = "config.json"
