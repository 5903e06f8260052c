"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from wsdl_flattener.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from wsdl_flattener.configuration.loader import load_configuration


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Run configuration template" in scaffold
    assert "loading:" in scaffold
    assert "parse_timeout_ms:" in scaffold
    assert "max_files:" in scaffold
    assert "skip_list:" in scaffold
    assert "output:" in scaffold
    assert "<REQUIRED>" in scaffold


def test_placeholder_configuration_is_valid_yaml() -> None:
    parsed = yaml.safe_load(build_placeholder_configuration())

    assert parsed["loading"]["directory"] == "<REQUIRED>"
    assert parsed["loading"]["parse_timeout_ms"] == 20000
    assert parsed["output"]["directory"] == "results"


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_filled_placeholder_configuration_loads(tmp_path: Path) -> None:
    output_path = write_placeholder_configuration(tmp_path / "config.yaml")
    output_path.write_text(
        output_path.read_text(encoding="utf-8").replace("<REQUIRED>", "descriptors"),
        encoding="utf-8",
    )

    configuration = load_configuration(output_path)

    assert configuration.source_dir == (tmp_path / "descriptors").resolve()
    assert len(configuration.loader.skip_list) == 0


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)
