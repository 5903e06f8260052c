"""Run execution domain exports."""

from .processing_pipeline import PipelineExecutionError, ProcessingPipeline
from .run_contracts import IndexedDocument, PipelineOutcome, PipelineStage, PipelineStrategy

__all__ = [
    "IndexedDocument",
    "PipelineExecutionError",
    "PipelineOutcome",
    "PipelineStage",
    "PipelineStrategy",
    "ProcessingPipeline",
]
