"""Run execution entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from wsdl_flattener.document_loading.document_models import LoadFailure, ParsedDocument
from wsdl_flattener.schema_indexing.schema_index import SchemaIndex


class PipelineStage(str, Enum):
    """Linear progression of one pipeline run."""

    CREATED = "CREATED"
    LOADED = "LOADED"
    TRANSFORMED = "TRANSFORMED"
    COMPARED = "COMPARED"
    UNLOADED = "UNLOADED"
    CLEANED = "CLEANED"


@dataclass(frozen=True)
class IndexedDocument:
    """A parsed document paired with the schema index built for it."""

    document: ParsedDocument
    index: SchemaIndex


@dataclass(frozen=True)
class PipelineOutcome:
    """Output contract for one completed run."""

    documents_loaded: int
    failures: tuple[LoadFailure, ...]
    artifact_path: Path | None
    final_stage: PipelineStage


class PipelineStrategy(Protocol):
    """Use-case specific stages plugged into the processing pipeline."""

    def transform(self, documents: Sequence[IndexedDocument]) -> Any:
        """Translate indexed documents into comparison models."""
        ...

    def compare(self, models: Any) -> Any:
        """Compare the transformed models."""
        ...

    def unload(self, results: Any, output_dir: Path) -> Path | None:
        """Persist comparison results and return the written artifact."""
        ...
