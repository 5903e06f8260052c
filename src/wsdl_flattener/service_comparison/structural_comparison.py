"""Structural comparison of flattened service interfaces."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from itertools import combinations
from pathlib import Path

from wsdl_flattener.results_writing.comparison_report_writer import write_comparison_workbook
from wsdl_flattener.run_execution.run_contracts import IndexedDocument
from wsdl_flattener.schema_indexing.xml_names import iter_by_kind
from wsdl_flattener.type_flattening.message_fields import (
    FieldBuilder,
    MessageField,
    MessageFieldBuilder,
)
from wsdl_flattener.type_flattening.type_flattener import TypeFlattener

from .concept_reasoning import ConceptReasoner
from .service_models import ComparisonResults, MessageMatch, ServiceComparison, ServiceModel

logger = logging.getLogger(__name__)

ResultsWriter = Callable[[ComparisonResults, Path], Path]


def build_service_model(
    indexed: IndexedDocument, field_builder: FieldBuilder | None = None
) -> ServiceModel:
    """Flatten every named message of a document into its primitive fields."""
    builder = field_builder or MessageFieldBuilder()
    flattener = TypeFlattener(indexed.index)
    messages: dict[str, frozenset[MessageField]] = {}
    for message in iter_by_kind(indexed.document.root, "message"):
        name = message.get("name")
        if not name:
            continue
        messages[name] = frozenset(flattener.flatten_message(builder, message))
    return ServiceModel(service_name=indexed.document.service_name, messages=messages)


def overlap_score(first: frozenset[tuple[str, str]], second: frozenset[tuple[str, str]]) -> float:
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def compare_pair(
    first: ServiceModel, second: ServiceModel, reasoner: ConceptReasoner | None = None
) -> ServiceComparison:
    """Find, for each message of first, the structurally closest message of second."""
    matches = []
    candidates = {
        name: _field_keys(fields, reasoner) for name, fields in sorted(second.messages.items())
    }
    for message_name, fields in sorted(first.messages.items()):
        keys = _field_keys(fields, reasoner)
        best = MessageMatch(message=message_name, counterpart=None, score=0.0, shared_fields=())
        for candidate_name, candidate_keys in candidates.items():
            score = overlap_score(keys, candidate_keys)
            if best.counterpart is None or score > best.score:
                best = MessageMatch(
                    message=message_name,
                    counterpart=candidate_name,
                    score=score,
                    shared_fields=tuple(sorted(keys & candidate_keys)),
                )
        matches.append(best)
    return ServiceComparison(
        first_service=first.service_name,
        second_service=second.service_name,
        message_matches=tuple(matches),
    )


def compare_services(
    models: Sequence[ServiceModel], reasoner: ConceptReasoner | None = None
) -> tuple[ServiceComparison, ...]:
    """Compare every unordered pair of services."""
    return tuple(compare_pair(first, second, reasoner) for first, second in combinations(models, 2))


def _field_keys(
    fields: frozenset[MessageField], reasoner: ConceptReasoner | None
) -> frozenset[tuple[str, str]]:
    if reasoner is None:
        return frozenset(field.key for field in fields)
    return frozenset((reasoner.canonical_name(field.name), field.type_name) for field in fields)


class StructuralComparisonStrategy:
    """Default pipeline strategy: flatten messages, compare overlap, write a workbook."""

    def __init__(
        self,
        *,
        reasoner: ConceptReasoner | None = None,
        field_builder: FieldBuilder | None = None,
        writer: ResultsWriter | None = None,
    ) -> None:
        self._reasoner = reasoner
        self._field_builder = field_builder or MessageFieldBuilder()
        self._writer = writer or write_comparison_workbook

    def transform(self, documents: Sequence[IndexedDocument]) -> tuple[ServiceModel, ...]:
        return tuple(build_service_model(indexed, self._field_builder) for indexed in documents)

    def compare(self, models: tuple[ServiceModel, ...]) -> ComparisonResults:
        if self._reasoner is not None and not self._reasoner.classify():
            logger.warning("Concept hierarchy is inconsistent; canonical names may be unreliable")
        return ComparisonResults(
            models=models,
            comparisons=compare_services(models, self._reasoner),
        )

    def unload(self, results: ComparisonResults, output_dir: Path) -> Path:
        return self._writer(results, output_dir)
