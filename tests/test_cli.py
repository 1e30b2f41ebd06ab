"""Command Line — exit codes and output of strike / verify."""

import json
import logging

import pytest

from dotmatrix.cli import EXIT_FAILURE, EXIT_OK, main


@pytest.fixture(autouse=True)
def drop_cli_log_handler():
    """main() installs a root handler bound to the captured stderr."""
    yield
    for handler in list(logging.root.handlers):
        if getattr(handler, "_dotmatrix", False):
            logging.root.removeHandler(handler)


def test_strike_writes_file(substrate_root, capsys):
    code = main(["strike", "104,101,108,108,111", "-o", "hello.bin"])
    assert code == EXIT_OK
    assert (substrate_root / "hello.bin").read_bytes() == b"hello"
    out = capsys.readouterr().out
    assert "Struck 5 byte(s)" in out
    assert "Hex: 68 65 6c 6c 6f" in out


def test_strike_default_target(substrate_root):
    assert main(["strike", "65,66"]) == EXIT_OK
    assert (substrate_root / "dist" / "substrate.bin").read_bytes() == b"AB"


def test_strike_invalid_input(substrate_root, capsys):
    assert main(["strike", "72, 160, 108", "-o", "bad.bin"]) == EXIT_FAILURE
    assert "position 1 (160)" in capsys.readouterr().err
    assert not (substrate_root / "bad.bin").exists()


def test_strike_existing_target_needs_force(substrate_root):
    (substrate_root / "t.bin").write_bytes(b"old")
    assert main(["strike", "65", "-o", "t.bin"]) == EXIT_FAILURE
    assert main(["strike", "65", "-o", "t.bin", "--force"]) == EXIT_OK
    assert (substrate_root / "t.bin").read_bytes() == b"A"


def test_strike_traversal_json_error(capsys):
    assert main(["--json", "strike", "65", "-o", "../up.bin"]) == EXIT_FAILURE
    payload = json.loads(capsys.readouterr().out)
    assert payload["error"]["code"] == "PATH_TRAVERSAL"


def test_verify_pass(substrate_root, capsys):
    (substrate_root / "ok.bin").write_bytes(b"fine")
    assert main(["verify", "ok.bin"]) == EXIT_OK
    assert "PASS: Substrate is clean." in capsys.readouterr().out


def test_verify_fail(substrate_root, capsys):
    (substrate_root / "bad.bin").write_bytes(bytes([65, 0xC2, 0xA0]))
    assert main(["verify", "bad.bin"]) == EXIT_FAILURE
    captured = capsys.readouterr()
    assert "FAIL: 2 contaminant(s) detected" in captured.out
    assert "position 1: 0xC2" in captured.err


def test_verify_json(substrate_root, capsys):
    (substrate_root / "ok.bin").write_bytes(b"x")
    assert main(["--json", "verify", "ok.bin"]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["clean"] is True


def test_verify_missing(capsys):
    assert main(["verify", "missing.bin"]) == EXIT_FAILURE
    assert "not found" in capsys.readouterr().err


def test_strike_parse_failure_json_envelope(substrate_root, capsys):
    assert main(["--json", "strike", "72, 300", "-o", "x.bin"]) == EXIT_FAILURE
    error = json.loads(capsys.readouterr().out)["error"]
    assert error["code"] == "FORMAT_ERROR"
    assert error["context"]["position"] == 1
    assert not (substrate_root / "x.bin").exists()
