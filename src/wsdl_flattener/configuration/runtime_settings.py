"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSION = ".wsdl"
DEFAULT_PARSE_TIMEOUT_MS = 20000


@dataclass(frozen=True)
class SkipList:
    """Filename stems excluded from loading."""

    stems: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_text(cls, text: str) -> SkipList:
        """Parse a newline-delimited skip list, ignoring blank lines and # comments."""
        stems = []
        for line in text.splitlines():
            entry = line.split("#", 1)[0].strip()
            if entry:
                stems.append(entry)
        return cls(stems=frozenset(stems))

    @classmethod
    def of(cls, stems: Iterable[str]) -> SkipList:
        return cls(stems=frozenset(stem.strip() for stem in stems if stem.strip()))

    def __contains__(self, stem: object) -> bool:
        return stem in self.stems

    def __len__(self) -> int:
        return len(self.stems)


@dataclass(frozen=True)
class LoaderSettings:
    """Document loading settings shared read-only across runs."""

    extension: str = DEFAULT_EXTENSION
    parse_timeout_ms: int = DEFAULT_PARSE_TIMEOUT_MS
    max_files: int | None = None
    skip_list: SkipList = field(default_factory=SkipList)

    def __post_init__(self) -> None:
        extension = self.extension.strip()
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        object.__setattr__(self, "extension", extension)

    @property
    def parse_timeout_seconds(self) -> float:
        return self.parse_timeout_ms / 1000.0


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    source_dir: Path
    output_dir: Path
    loader: LoaderSettings
