"""CLI orchestration integration tests."""

from __future__ import annotations

import shutil
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from wsdl_flattener.cli import cli
from wsdl_flattener.results_writing import COMPARISONS_SHEET_NAME

SAMPLES_DIR = Path(__file__).resolve().parents[3] / "samples"


def _copy_samples(tmp_path: Path) -> Path:
    target = tmp_path / "descriptors"
    shutil.copytree(SAMPLES_DIR, target)
    return target


def _write_config(tmp_path: Path, source_dir: Path, **loading: object) -> Path:
    lines = ["loading:", f'  directory: "{source_dir}"', "  skip_list:", "    inline: []"]
    lines.extend(f"  {key}: {value}" for key, value in loading.items())
    lines.extend(["output:", '  directory: "results"'])
    path = tmp_path / "config.yaml"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _artifact_path(output: str) -> Path:
    candidates = [line for line in output.splitlines() if line.strip().endswith(".xlsx")]
    assert len(candidates) == 1, output
    return Path(candidates[0].strip())


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("config.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "loading:" in content
        assert "output:" in content
        assert "<REQUIRED>" in content
        assert str(output_path) in result.output


def test_generate_config_command_fails_when_output_file_already_exists(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "config.yaml"
    output_path.write_text("already-there", encoding="utf-8")

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code != 0
    assert "already exists" in str(result.exception).lower()
    assert output_path.read_text(encoding="utf-8") == "already-there"


def test_flatten_command_prints_primitive_fields_per_message() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["flatten", "--file", str(SAMPLES_DIR / "AddressLookup.wsdl")])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "GetAddressRequest\tcustomerId\tint",
        "GetAddressResponse\tcity\tstring",
        "GetAddressResponse\tpostalCode\tstring",
        "GetAddressResponse\tstreet\tstring",
    ]


def test_flatten_command_filters_by_message() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "flatten",
            "--file",
            str(SAMPLES_DIR / "CustomerDirectory.wsdl"),
            "--message",
            "FindCustomerRequest",
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["FindCustomerRequest\tcustomerId\tint"]


def test_flatten_command_reports_unknown_message() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["flatten", "--file", str(SAMPLES_DIR / "AddressLookup.wsdl"), "--message", "Nope"],
    )

    assert result.exit_code != 0
    assert "Message not found: Nope" in str(result.exception)


def test_flatten_command_reports_parse_failure(tmp_path: Path) -> None:
    broken = tmp_path / "Broken.wsdl"
    broken.write_text("<definitions><message>", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["flatten", "--file", str(broken)])

    assert result.exit_code != 0
    assert "PARSE_FAILURE" in str(result.exception)


def test_flatten_command_reports_missing_file(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["flatten", "--file", str(tmp_path / "absent.wsdl")])

    assert result.exit_code != 0
    assert "Descriptor file not found" in str(result.exception)


def test_run_command_writes_comparison_workbook(tmp_path: Path) -> None:
    source_dir = _copy_samples(tmp_path)
    config_path = _write_config(tmp_path, source_dir)
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "loaded 2 document(s), skipped 0" in result.output
    artifact = _artifact_path(result.output)
    assert artifact.parent == (tmp_path / "results").resolve()
    workbook = load_workbook(artifact)
    rows = list(workbook[COMPARISONS_SHEET_NAME].iter_rows(min_row=2, values_only=True))
    assert rows == [("AddressLookup", "CustomerDirectory", 0.6667, 2)]


def test_run_command_honours_output_dir_and_max_files_overrides(tmp_path: Path) -> None:
    source_dir = _copy_samples(tmp_path)
    config_path = _write_config(tmp_path, source_dir)
    override_dir = tmp_path / "override"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["run", "--config", str(config_path), "--output-dir", str(override_dir), "--max-files", "1"],
    )

    assert result.exit_code == 0, result.output
    assert "loaded 1 document(s)" in result.output
    artifact = _artifact_path(result.output)
    assert artifact.parent == override_dir.resolve()
    workbook = load_workbook(artifact)
    assert list(workbook[COMPARISONS_SHEET_NAME].iter_rows(min_row=2, values_only=True)) == []


def test_run_command_lists_skipped_documents(tmp_path: Path) -> None:
    source_dir = _copy_samples(tmp_path)
    (source_dir / "Zeta.wsdl").write_text("not xml at all", encoding="utf-8")
    config_path = _write_config(tmp_path, source_dir)
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "loaded 2 document(s), skipped 1" in result.output
    assert "PARSE_FAILURE: Zeta.wsdl" in result.output


def test_run_command_reports_missing_source_directory(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, tmp_path / "missing")
    runner = CliRunner()

    result = runner.invoke(cli, ["run", "--config", str(config_path)])

    assert result.exit_code != 0
    assert "Source directory not found" in str(result.exception)
