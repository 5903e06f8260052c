"""Document loading exports."""

from .document_loader import (
    DocumentLoader,
    DocumentLoadError,
    ParseCancelledError,
    ParserConfigurationError,
    parse_descriptor,
)
from .document_models import FailureKind, LoadBatch, LoadFailure, ParsedDocument

__all__ = [
    "DocumentLoader",
    "DocumentLoadError",
    "ParseCancelledError",
    "ParserConfigurationError",
    "parse_descriptor",
    "FailureKind",
    "LoadBatch",
    "LoadFailure",
    "ParsedDocument",
]
