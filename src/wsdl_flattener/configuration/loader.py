"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_EXTENSION,
    DEFAULT_PARSE_TIMEOUT_MS,
    Configuration,
    LoaderSettings,
    SkipList,
)

DEFAULT_SKIP_LIST_RESOURCE = "default_skip_list.txt"
DEFAULT_OUTPUT_DIRNAME = "results"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    loading = _require_mapping(parsed.get("loading"), "loading")
    source_dir = _resolve_path(
        base_path, _require_non_empty_string(loading.get("directory"), "loading.directory")
    )
    loader_settings = _parse_loader_settings(loading, base_path)
    output_dir = _parse_output_section(parsed.get("output"), base_path)

    return Configuration(
        path=path,
        source_dir=source_dir,
        output_dir=output_dir,
        loader=loader_settings,
    )


def load_default_skip_list() -> SkipList:
    """Return the skip list bundled with the package."""
    text = (
        resources.files("wsdl_flattener.configuration")
        .joinpath(DEFAULT_SKIP_LIST_RESOURCE)
        .read_text(encoding="utf-8")
    )
    return SkipList.from_text(text)


def load_skip_list_file(path: Path | str) -> SkipList:
    """Read a newline-delimited skip list artifact."""
    skip_path = Path(path)
    if not skip_path.exists():
        raise ConfigurationError(f"Skip list file not found: {skip_path}")
    return SkipList.from_text(skip_path.read_text(encoding="utf-8"))


def _parse_loader_settings(section: Mapping[str, Any], base_path: Path) -> LoaderSettings:
    extension = _require_non_empty_string(
        section.get("extension", DEFAULT_EXTENSION), "loading.extension"
    )
    parse_timeout_ms = _require_positive_int(
        section.get("parse_timeout_ms", DEFAULT_PARSE_TIMEOUT_MS), "loading.parse_timeout_ms"
    )
    max_files_raw = section.get("max_files")
    max_files = (
        None if max_files_raw is None else _require_positive_int(max_files_raw, "loading.max_files")
    )
    skip_list = _parse_skip_list_section(section.get("skip_list"), base_path)
    return LoaderSettings(
        extension=extension,
        parse_timeout_ms=parse_timeout_ms,
        max_files=max_files,
        skip_list=skip_list,
    )


def _parse_skip_list_section(value: Any, base_path: Path) -> SkipList:
    if value is None:
        return load_default_skip_list()
    mapping = _require_mapping(value, "loading.skip_list")
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline is not None and path_value is not None:
        raise ConfigurationError("loading.skip_list must not set both inline and path.")
    if inline is not None:
        return SkipList.of(_normalize_string_sequence(inline, "loading.skip_list.inline"))
    if path_value is not None:
        raw_path = _require_non_empty_string(path_value, "loading.skip_list.path")
        return load_skip_list_file(_resolve_path(base_path, raw_path))
    raise ConfigurationError("loading.skip_list requires either inline or path.")


def _parse_output_section(value: Any, base_path: Path) -> Path:
    if value is None:
        return (base_path / DEFAULT_OUTPUT_DIRNAME).resolve()
    section = _require_mapping(value, "output")
    directory = section.get("directory", DEFAULT_OUTPUT_DIRNAME)
    return _resolve_path(base_path, _require_non_empty_string(directory, "output.directory"))


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
