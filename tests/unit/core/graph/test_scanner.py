from __future__ import annotations

"""
Unit tests for the include directive scanner.

Verifies:
1. Directive grammar (prefix, closing quote, trailing content).
2. Scan statistics and the early-stop window.
3. OSError propagation for unreadable files.
"""

import pytest

from wgslbundle.core.graph.scanner import parse_directive, scan_includes


@pytest.mark.parametrize("line, expected", [
    ('#include "common.wgsl"', (True, "common.wgsl")),
    ('#include "lib/noise.wgsl" // trailing', (True, "lib/noise.wgsl")),
    ('#include "unterminated.wgsl', (True, None)),
    ('#include <angle.wgsl>', (False, None)),
    (' #include "indented.wgsl"', (False, None)),
    ('// #include "commented.wgsl"', (False, None)),
    ('fn main() {}', (False, None)),
    ('', (False, None)),
])
def test_parse_directive(line, expected):
    assert parse_directive(line) == expected


def test_scan_collects_directives_in_order(tmp_path):
    f = tmp_path / "a.wgsl"
    f.write_text('#include "b.wgsl"\n#include "c.wgsl"\nfn main() {}\n', encoding="utf-8")

    scan = scan_includes(str(f))

    assert [d.target for d in scan.directives] == ["b.wgsl", "c.wgsl"]
    assert [d.line_no for d in scan.directives] == [1, 2]
    assert scan.stopped_early is False
    assert scan.lines_read == 3


def test_scan_stops_after_window(tmp_path):
    f = tmp_path / "a.wgsl"
    f.write_text("".join(f"line {i}\n" for i in range(20)) + '#include "late.wgsl"\n', encoding="utf-8")

    scan = scan_includes(str(f), scan_window=5)

    assert scan.directives == []
    assert scan.stopped_early is True
    assert scan.lines_read == 5


def test_scan_malformed_does_not_advance_window(tmp_path):
    """Malformed directives are counted but do not consume the window."""
    f = tmp_path / "a.wgsl"
    f.write_text(
        '1\n2\n3\n4\n#include "bad\n#include "bad\n#include "ok.wgsl"\n',
        encoding="utf-8",
    )

    scan = scan_includes(str(f), scan_window=5)

    assert scan.malformed == 2
    assert [d.target for d in scan.directives] == ["ok.wgsl"]


def test_scan_handles_crlf(tmp_path):
    f = tmp_path / "a.wgsl"
    f.write_bytes(b'#include "b.wgsl"\r\nbody\r\n')

    scan = scan_includes(str(f))

    assert [d.target for d in scan.directives] == ["b.wgsl"]


def test_scan_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        scan_includes(str(tmp_path / "missing.wgsl"))
