"""Load, transform, compare, unload and cleanup orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from wsdl_flattener.document_loading.document_loader import DocumentLoader, DocumentLoadError
from wsdl_flattener.document_loading.document_models import LoadFailure
from wsdl_flattener.schema_indexing.schema_index import SchemaIndex

from .run_contracts import IndexedDocument, PipelineOutcome, PipelineStage, PipelineStrategy

logger = logging.getLogger(__name__)


class PipelineExecutionError(Exception):
    """Raised when a pipeline stage cannot be completed."""


class ProcessingPipeline:
    """Drives one loader and one strategy through a fixed stage sequence.

    Cleanup runs even when an earlier stage fails. An instance owns the
    documents and indexes of its run and is not meant to be shared.
    """

    def __init__(
        self,
        loader: DocumentLoader,
        strategy: PipelineStrategy,
        *,
        output_dir: Path | str,
    ) -> None:
        self._loader = loader
        self._strategy = strategy
        self._output_dir = Path(output_dir)
        self._stage = PipelineStage.CREATED
        self._documents: list[IndexedDocument] = []
        self._failures: tuple[LoadFailure, ...] = ()

    @property
    def stage(self) -> PipelineStage:
        return self._stage

    @property
    def documents(self) -> tuple[IndexedDocument, ...]:
        return tuple(self._documents)

    def run(self, source_dir: Path | str) -> PipelineOutcome:
        """Execute every stage in order; cleanup is guaranteed."""
        try:
            self.load(source_dir)
            models = self._run_stage("transform", self._strategy.transform, self.documents)
            self._stage = PipelineStage.TRANSFORMED
            results = self._run_stage("compare", self._strategy.compare, models)
            self._stage = PipelineStage.COMPARED
            artifact_path = self._run_stage(
                "unload", self._strategy.unload, results, self._output_dir
            )
            self._stage = PipelineStage.UNLOADED
            documents_loaded = len(self._documents)
        finally:
            self.cleanup()
        return PipelineOutcome(
            documents_loaded=documents_loaded,
            failures=self._failures,
            artifact_path=artifact_path,
            final_stage=self._stage,
        )

    def load(self, source_dir: Path | str) -> None:
        """Load the source directory, indexing every document that parsed."""
        try:
            batch = self._loader.load(source_dir)
        except DocumentLoadError as exc:
            raise PipelineExecutionError(str(exc)) from exc
        self._failures = batch.failures
        self._documents = [
            IndexedDocument(document=document, index=SchemaIndex(document))
            for document in batch.documents
        ]
        self._stage = PipelineStage.LOADED
        if self._failures:
            logger.info(
                "Loaded %d document(s); %d skipped", len(self._documents), len(self._failures)
            )

    def cleanup(self) -> None:
        """Stop the loader worker and release documents and indexes."""
        if self._stage is PipelineStage.CLEANED:
            return
        self._loader.shutdown()
        for indexed in self._documents:
            indexed.index.invalidate()
        self._documents.clear()
        self._stage = PipelineStage.CLEANED

    def _run_stage(self, name: str, stage: Any, *args: Any) -> Any:
        logger.debug("Running %s stage", name)
        try:
            return stage(*args)
        except PipelineExecutionError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise PipelineExecutionError(f"{name} stage failed: {exc}") from exc
