"""Document loading entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from xml.etree.ElementTree import Element


class FailureKind(str, Enum):
    """Classification of a document that was skipped during loading."""

    IO_FAILURE = "IO_FAILURE"
    PARSE_FAILURE = "PARSE_FAILURE"
    TIMEOUT = "TIMEOUT"
    INTERRUPTED = "INTERRUPTED"


@dataclass(frozen=True)
class ParsedDocument:
    """In-memory element tree for one source file."""

    source_path: Path
    root: Element

    @property
    def stem(self) -> str:
        return self.source_path.stem

    @property
    def service_name(self) -> str:
        """Service name declared on the root, falling back to the file stem."""
        return self.root.get("name") or self.stem


@dataclass(frozen=True)
class LoadFailure:
    """A candidate file that could not be loaded."""

    source_path: Path
    kind: FailureKind
    detail: str


@dataclass(frozen=True)
class LoadBatch:
    """Ordered outcomes of one load invocation."""

    outcomes: tuple[ParsedDocument | LoadFailure, ...] = ()

    @property
    def documents(self) -> tuple[ParsedDocument, ...]:
        return tuple(item for item in self.outcomes if isinstance(item, ParsedDocument))

    @property
    def failures(self) -> tuple[LoadFailure, ...]:
        return tuple(item for item in self.outcomes if isinstance(item, LoadFailure))
