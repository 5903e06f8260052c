"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    load_configuration,
    load_default_skip_list,
    load_skip_list_file,
)
from .runtime_settings import Configuration, LoaderSettings, SkipList

__all__ = [
    "Configuration",
    "LoaderSettings",
    "SkipList",
    "ConfigurationError",
    "load_configuration",
    "load_default_skip_list",
    "load_skip_list_file",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
