"""Service comparison exports."""

from .concept_reasoning import ConceptReasoner
from .service_models import ComparisonResults, MessageMatch, ServiceComparison, ServiceModel
from .structural_comparison import (
    StructuralComparisonStrategy,
    build_service_model,
    compare_pair,
    compare_services,
    overlap_score,
)

__all__ = [
    "ComparisonResults",
    "ConceptReasoner",
    "MessageMatch",
    "ServiceComparison",
    "ServiceModel",
    "StructuralComparisonStrategy",
    "build_service_model",
    "compare_pair",
    "compare_services",
    "overlap_score",
]
