"""Interface of the external concept reasoner consulted during comparison."""

from __future__ import annotations

from typing import Protocol


class ConceptReasoner(Protocol):
    """Ontology-backed oracle; implementations live outside this package."""

    def classify(self) -> bool:
        """Classify the loaded concept hierarchy and report whether it is consistent."""
        ...

    def canonical_name(self, concept: str) -> str: ...

    def ancestors(self, concept: str, include_self: bool = False) -> tuple[str, ...]: ...

    def common_ancestors(
        self, first: tuple[str, ...], second: tuple[str, ...]
    ) -> tuple[str, ...]: ...

    def relationships(self, first: str, second: str) -> tuple[str, ...]:
        """Relationship properties whose domain is first and range is second."""
        ...
