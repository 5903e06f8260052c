"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from wsdl_flattener.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["flatten", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_timeout_is_rejected_by_option_parsing(capsys, tmp_path: Path) -> None:
    exit_code = main(["flatten", "--file", str(tmp_path / "a.wsdl"), "--timeout-ms", "0"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--timeout-ms" in captured.err


def test_domain_errors_are_reported_without_traceback(capsys, tmp_path: Path) -> None:
    exit_code = main(["run", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_log_level_is_rejected(capsys) -> None:
    exit_code = main(["--log-level", "CHATTY", "run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--log-level" in captured.err
