"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Run configuration template for wsdl-flattener.
# Replace every <REQUIRED> placeholder before running.
# Relative paths are resolved against the directory holding this file.

loading:
  # Directory holding the service descriptor documents.
  directory: "<REQUIRED>"
  extension: ".wsdl"
  # Per-document parse bound in milliseconds.
  parse_timeout_ms: 20000
  # Stop after this many accepted documents (null for no limit).
  max_files: null
  # Omit skip_list to use the bundled default list.
  # Provide either a newline-delimited stem file or an inline list.
  skip_list:
    inline: []
    # path: "skiplist.txt"

output:
  # Directory receiving the comparison workbook.
  directory: "results"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML run configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder run configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
