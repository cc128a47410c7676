from __future__ import annotations

"""
Bundle Emitter.

Second, independent pass over the discovered files: each one is reopened
and its lines copied to the destination, minus every line mentioning
``#include``. A file that cannot be reopened is reported and left out; the
rest of the bundle is still written. A destination that stops accepting
writes ends the pass with ``OutputWriteError``.
"""

import logging
from typing import Iterable, List, TextIO

from wgslbundle.core.pipeline.components.reader import iter_lines, open_source
from wgslbundle.core.pipeline.components.writer import write_filtered
from wgslbundle.domain.constants import COPY_ERRORS, DEFAULT_ENCODING
from wgslbundle.domain.errors import OutputWriteError
from wgslbundle.domain.graph_models import EmitResult

logger = logging.getLogger(__name__)


def emit(order: Iterable[str], out: TextIO, encoding: str = DEFAULT_ENCODING) -> EmitResult:
    """
    Concatenate files into ``out`` in the given order.

    Each path is opened once. Undecodable bytes are carried as surrogate
    escapes, so ``out`` must use the ``surrogateescape`` error handler (see
    ``infra.fs.open_output``) for them to be written back unchanged. Lines
    are written with a trailing newline translated by ``out`` to the
    platform terminator.

    Args:
        order: File identities, usually from ``emission_order``.
        out: Destination text stream.
        encoding: Text encoding of the sources.

    Returns:
        EmitResult: Emitted and skipped files with line counters.

    Raises:
        OutputWriteError: If the destination rejects a write.
    """
    emitted: List[str] = []
    skipped: List[str] = []
    total_written = 0
    total_dropped = 0

    for path in order:
        try:
            source = open_source(path, encoding, COPY_ERRORS)
        except OSError as e:
            logger.error(f"Could not open input file: {path} ({e.strerror or e})")
            skipped.append(path)
            continue

        try:
            with source:
                written, dropped = write_filtered(iter_lines(source), out)
        except OutputWriteError:
            raise
        except OSError as e:
            # Lines copied before the failure stay in the destination
            logger.error(f"Could not read input file: {path} ({e.strerror or e})")
            skipped.append(path)
            continue

        logger.debug(f"Emitted {path}: {written} line(s), {dropped} include line(s) dropped")
        emitted.append(path)
        total_written += written
        total_dropped += dropped

    return EmitResult(
        emitted=emitted,
        skipped=skipped,
        lines_written=total_written,
        lines_dropped=total_dropped,
    )
