from __future__ import annotations

"""
Unit tests for configuration validation.
"""

import pytest

from wgslbundle.core.pipeline.validator import validate_config
from wgslbundle.domain.config import get_default_config


def test_non_dict_falls_back_to_defaults():
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert cfg == get_default_config()
    assert warnings


def test_non_dict_strict_raises():
    with pytest.raises(TypeError):
        validate_config("nope", strict=True)


def test_numeric_strings_are_coerced():
    cfg, warnings = validate_config({"scan_window": "8", "max_depth": " 12 "})

    assert cfg["scan_window"] == 8
    assert cfg["max_depth"] == 12
    assert len(warnings) == 2


@pytest.mark.parametrize("value", [0, -3, "abc", True, 2.5])
def test_invalid_scan_window_uses_default(value):
    cfg, warnings = validate_config({"scan_window": value})

    assert cfg["scan_window"] == get_default_config()["scan_window"]
    assert warnings


def test_invalid_scan_window_strict_raises():
    with pytest.raises(ValueError):
        validate_config({"scan_window": 0}, strict=True)


def test_relative_to_is_checked():
    cfg, warnings = validate_config({"relative_to": "CWD"})
    assert cfg["relative_to"] == "cwd"
    assert warnings == []

    cfg, warnings = validate_config({"relative_to": "home"})
    assert cfg["relative_to"] == "program"
    assert warnings


def test_unknown_encoding_falls_back():
    cfg, warnings = validate_config({"encoding": "no-such-codec"})

    assert cfg["encoding"] == "utf-8"
    assert warnings


def test_unknown_keys_are_dropped():
    cfg, warnings = validate_config({"colour": "blue"})

    assert "colour" not in cfg
    assert warnings == ["Unknown config key 'colour' ignored."]


def test_blank_output_path_means_stdout():
    cfg, _ = validate_config({"output_path": "   "})

    assert cfg["output_path"] is None


def test_lenient_exit_string_coercion():
    cfg, _ = validate_config({"lenient_exit": "yes"})

    assert cfg["lenient_exit"] is True
