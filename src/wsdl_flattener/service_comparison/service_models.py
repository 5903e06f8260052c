"""Service comparison entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from wsdl_flattener.type_flattening.message_fields import MessageField


@dataclass(frozen=True)
class ServiceModel:
    """Flattened message structure of one service interface."""

    service_name: str
    messages: Mapping[str, frozenset[MessageField]]

    @property
    def field_count(self) -> int:
        return sum(len(fields) for fields in self.messages.values())


@dataclass(frozen=True)
class MessageMatch:
    """Best counterpart in the other service for one message."""

    message: str
    counterpart: str | None
    score: float
    shared_fields: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class ServiceComparison:
    """Structural comparison between two services."""

    first_service: str
    second_service: str
    message_matches: tuple[MessageMatch, ...]

    @property
    def score(self) -> float:
        """Mean best-match score across the first service's messages."""
        if not self.message_matches:
            return 0.0
        return sum(match.score for match in self.message_matches) / len(self.message_matches)


@dataclass(frozen=True)
class ComparisonResults:
    """Everything the unload stage persists for one run."""

    models: tuple[ServiceModel, ...]
    comparisons: tuple[ServiceComparison, ...]
