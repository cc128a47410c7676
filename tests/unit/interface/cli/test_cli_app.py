from __future__ import annotations

"""
Unit tests for the CLI application controller.

Runs ``main()`` in-process and checks exit codes, stdout payload and the
files produced.
"""

import json

import pytest

from wgslbundle.interface.cli.app import main


@pytest.fixture
def shader_tree(make_tree):
    return make_tree({
        "a.wgsl": '#include "b.wgsl"\nfn main() {}\n',
        "b.wgsl": "fn helper() {}\n",
    })


def test_bundle_to_file(shader_tree):
    out = shader_tree / "out.wgsl"

    code = main([str(shader_tree / "a.wgsl"), str(out), "--use-defaults"])

    assert code == 0
    assert out.read_text(encoding="utf-8") == "fn helper() {}\nfn main() {}\n"


def test_bundle_to_stdout(shader_tree, capsys):
    code = main([str(shader_tree / "a.wgsl"), "--use-defaults"])

    assert code == 0
    assert capsys.readouterr().out == "fn helper() {}\nfn main() {}\n"


@pytest.mark.parametrize("extra", [[], ["b.wgsl", "c.wgsl"]])
def test_wrong_argument_count_exits_1(shader_tree, capsys, extra):
    argv = [str(shader_tree / "a.wgsl"), *extra] if extra else []

    code = main(argv)

    captured = capsys.readouterr()
    assert code == 1
    assert "usage:" in captured.err
    assert captured.out == ""


def test_missing_root_exits_1(tmp_path, capsys):
    out = tmp_path / "out.wgsl"

    code = main([str(tmp_path / "missing.wgsl"), str(out), "--use-defaults"])

    assert code == 1
    assert not out.exists()
    assert "ERROR" in capsys.readouterr().err


def test_discovery_failure_exit_code(make_tree):
    base = make_tree({"a.wgsl": '#include "missing.wgsl"\nbody\n'})
    out = base / "out.wgsl"

    assert main([str(base / "a.wgsl"), str(out), "--use-defaults"]) == 1
    assert out.read_text(encoding="utf-8") == ""

    assert main([str(base / "a.wgsl"), str(out), "--use-defaults", "--lenient-exit"]) == 0


def test_unwritable_output_exits_1(shader_tree):
    target = shader_tree / "dir"
    target.mkdir()

    assert main([str(shader_tree / "a.wgsl"), str(target), "--use-defaults"]) == 1


def test_dry_run_prints_order(shader_tree, capsys):
    code = main([str(shader_tree / "a.wgsl"), "--use-defaults", "--dry-run"])

    lines = capsys.readouterr().out.splitlines()
    assert code == 0
    assert lines == [f"1\t{shader_tree / 'b.wgsl'}", f"0\t{shader_tree / 'a.wgsl'}"]


def test_dump_config(shader_tree, capsys):
    code = main([str(shader_tree / "a.wgsl"), "--use-defaults", "--dump-config", "--scan-window", "7"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["scan_window"] == 7
    assert data["input_path"] == str(shader_tree / "a.wgsl")


def test_config_file_is_applied(shader_tree, capsys):
    cfg = shader_tree / "cfg.json"
    cfg.write_text(json.dumps({"scan_window": 3, "max_depth": 4}), encoding="utf-8")

    code = main([str(shader_tree / "a.wgsl"), "--config", str(cfg), "--dump-config", "--max-depth", "8"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["scan_window"] == 3
    assert data["max_depth"] == 8


def test_log_file_receives_diagnostics(make_tree):
    base = make_tree({"a.wgsl": '#include "missing.wgsl"\n'})
    log_file = base / "logs" / "run.log"

    main([str(base / "a.wgsl"), str(base / "out.wgsl"), "--use-defaults", "--log-file", str(log_file)])

    assert "Could not open file" in log_file.read_text(encoding="utf-8")


def test_log_and_config_paths_expand_environment(make_tree, monkeypatch):
    base = make_tree({"a.wgsl": '#include "missing.wgsl"\n'})
    (base / "conf").mkdir()
    (base / "conf" / "cfg.json").write_text(json.dumps({"lenient_exit": True}), encoding="utf-8")
    monkeypatch.setenv("WGSLBUNDLE_TEST_ROOT", str(base))

    code = main([
        str(base / "a.wgsl"), str(base / "out.wgsl"),
        "--config", "$WGSLBUNDLE_TEST_ROOT/conf/cfg.json",
        "--log-file", "$WGSLBUNDLE_TEST_ROOT/logs/run.log",
    ])

    assert code == 0
    assert "Could not open file" in (base / "logs" / "run.log").read_text(encoding="utf-8")
