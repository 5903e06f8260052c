"""Recursive flattening of schema elements into primitive leaf fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from wsdl_flattener.schema_indexing.schema_index import SchemaIndex
from wsdl_flattener.schema_indexing.xml_names import (
    element_kind,
    iter_nearest_by_kind,
    local_name,
)

from .message_fields import FieldBuilder, MessageField
from .xsd_primitives import is_primitive_type

logger = logging.getLogger(__name__)

TYPE_LOOKUP_KINDS: tuple[str, ...] = ("complexType", "simpleType", "element")


@dataclass
class _Expansion:
    """Bookkeeping for one flatten call."""

    in_progress: set[int] = field(default_factory=set)
    completed: dict[int, frozenset[MessageField]] = field(default_factory=dict)
    cycle_hits: int = 0


class TypeFlattener:
    """Resolves element references through a schema index down to primitive fields.

    Lookups that miss at every fallback contribute nothing instead of failing,
    so a partially resolvable schema still yields its resolvable fields.
    Elements already being expanded on the current path contribute nothing
    when revisited, which keeps recursive type graphs finite. Within one call,
    an element expanded without hitting a cycle is expanded only once.
    """

    def __init__(self, index: SchemaIndex) -> None:
        self._index = index

    @property
    def index(self) -> SchemaIndex:
        return self._index

    def flatten(self, field_builder: FieldBuilder, element: Element | None) -> set[MessageField]:
        """Return the set of primitive fields reachable from element."""
        return self._flatten(field_builder, element, _Expansion())

    def flatten_message(
        self, field_builder: FieldBuilder, message: Element | None
    ) -> set[MessageField]:
        """Union of the flattened fields of every part of a WSDL message."""
        fields: set[MessageField] = set()
        if message is None:
            return fields
        for part in iter_nearest_by_kind(message, "part"):
            fields |= self.flatten(field_builder, part)
        return fields

    def resolve_type(self, type_name: str) -> Element | None:
        for kind in TYPE_LOOKUP_KINDS:
            resolved = self._index.find_by_kind_and_name(kind, type_name)
            if resolved is not None:
                return resolved
        return self._index.find_by_name(type_name)

    def resolve_element(self, element_name: str) -> Element | None:
        resolved = self._index.find_by_kind_and_name("element", element_name)
        if resolved is not None:
            return resolved
        return self._index.find_by_name(element_name)

    def _flatten(
        self, field_builder: FieldBuilder, element: Element | None, expansion: _Expansion
    ) -> set[MessageField]:
        if element is None:
            return set()
        marker = id(element)
        cached = expansion.completed.get(marker)
        if cached is not None:
            return set(cached)
        if marker in expansion.in_progress:
            logger.debug("Recursive reference to %s contributes no fields", element.get("name"))
            expansion.cycle_hits += 1
            return set()
        cycle_hits = expansion.cycle_hits
        expansion.in_progress.add(marker)
        try:
            fields = self._expand(field_builder, element, expansion)
        finally:
            expansion.in_progress.discard(marker)
        # cycle-truncated results depend on the path and are not reused
        if expansion.cycle_hits == cycle_hits:
            expansion.completed[marker] = frozenset(fields)
        return fields

    def _expand(
        self, field_builder: FieldBuilder, element: Element, expansion: _Expansion
    ) -> set[MessageField]:
        name = element.get("name", "")
        logger.debug("Flattening %s", name)

        type_ref = element.get("type")
        if type_ref:
            type_name = local_name(type_ref)
            if is_primitive_type(type_name):
                return {field_builder.build(name, type_name, element)}
            logger.debug("Looking up type: %s", type_name)
            resolved = self.resolve_type(type_name)
            if resolved is None:
                logger.debug("Type %s could not be resolved", type_name)
                return set()
            if element_kind(resolved) == "simpleType":
                base_name = self._simple_type_base(resolved)
                if base_name is not None:
                    return {field_builder.build(name, base_name, element)}
            return self._flatten(field_builder, resolved, expansion)

        reference = element.get("ref") or element.get("element")
        if reference:
            target = self.resolve_element(local_name(reference))
            if target is None:
                logger.debug("Element reference %s could not be resolved", reference)
                return set()
            return self._flatten(field_builder, target, expansion)

        fields: set[MessageField] = set()
        for child in iter_nearest_by_kind(element, "element"):
            fields |= self._flatten(field_builder, child, expansion)
        for extension in iter_nearest_by_kind(element, "extension"):
            base = extension.get("base")
            if base and not is_primitive_type(local_name(base)):
                base_type = self.resolve_type(local_name(base))
                fields |= self._flatten(field_builder, base_type, expansion)
        return fields

    def _simple_type_base(self, simple_type: Element) -> str | None:
        """Follow restriction bases until a primitive is reached."""
        seen: set[int] = set()
        current: Element | None = simple_type
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            restriction = next(iter_nearest_by_kind(current, "restriction"), None)
            base = restriction.get("base") if restriction is not None else None
            if not base:
                return None
            base_name = local_name(base)
            if is_primitive_type(base_name):
                return base_name
            current = self._index.find_by_kind_and_name("simpleType", base_name)
        return None
