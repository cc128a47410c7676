from __future__ import annotations

"""
Unit tests for configuration defaults and JSON loading.
"""

import json
import logging

from wgslbundle.domain import config as config_module
from wgslbundle.domain.config import get_default_config, load_config


def test_defaults_expose_scan_window_and_depth_limit():
    cfg = get_default_config()

    assert cfg["scan_window"] == 5
    assert cfg["max_depth"] >= 1
    assert cfg["output_path"] is None
    assert cfg["relative_to"] == "program"
    assert cfg["lenient_exit"] is False


def test_load_config_merges_explicit_file(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"scan_window": 12, "lenient_exit": True}), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["scan_window"] == 12
    assert cfg["lenient_exit"] is True
    assert cfg["relative_to"] == "program"


def test_load_config_missing_explicit_file_returns_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        cfg = load_config(str(tmp_path / "absent.json"))

    assert cfg == get_default_config()
    assert "Config file not found" in caplog.text


def test_load_config_corrupt_json_returns_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_config_non_object_returns_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_load_config_uses_user_file_by_default(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"max_depth": 9}), encoding="utf-8")
    monkeypatch.setattr(config_module, "get_config_path", lambda: str(path))

    assert load_config()["max_depth"] == 9
