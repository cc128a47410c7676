from __future__ import annotations

"""
Unit tests for the File Reader component.

Verifies:
1. Correct streaming of file content without terminators.
2. Resilience against encoding errors (binary/corrupt files).
"""

import pytest

from wgslbundle.core.pipeline.components.reader import stream_file_content


def test_stream_file_content_normal(tmp_path):
    """Verify reading a standard UTF-8 file."""
    f = tmp_path / "normal.wgsl"
    f.write_text("Line 1\nLine 2\nLine 3", encoding="utf-8")

    lines = list(stream_file_content(str(f)))

    assert lines == ["Line 1", "Line 2", "Line 3"]


def test_stream_file_content_resilience_to_binary(tmp_path):
    """Invalid UTF-8 bytes are replaced instead of raising UnicodeDecodeError."""
    f = tmp_path / "corrupt.wgsl"
    f.write_bytes(b"fn a() {}\n\x80\x81\xff\nfn b() {}")

    lines = list(stream_file_content(str(f)))

    assert lines[0] == "fn a() {}"
    assert "\ufffd" in lines[1]
    assert lines[2] == "fn b() {}"


def test_stream_file_content_handles_empty(tmp_path):
    f = tmp_path / "empty.wgsl"
    f.write_text("", encoding="utf-8")

    assert list(stream_file_content(str(f))) == []


def test_stream_file_raises_os_error_on_missing(tmp_path):
    with pytest.raises(OSError):
        list(stream_file_content(str(tmp_path / "missing.wgsl")))


def test_stream_file_content_surrogateescape_keeps_raw_bytes(tmp_path):
    """The copy handler preserves undecodable bytes for re-encoding."""
    f = tmp_path / "latin.wgsl"
    f.write_bytes(b"// caf\xe9\n")

    lines = list(stream_file_content(str(f), errors="surrogateescape"))

    assert lines == ["// caf\udce9"]
    assert lines[0].encode("utf-8", "surrogateescape") == b"// caf\xe9"
