"""Flattened message field entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from xml.etree.ElementTree import Element


@dataclass(frozen=True)
class MessageField:
    """Primitive leaf field; equal to any other field with the same name and type."""

    name: str
    type_name: str
    node: Element | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.type_name)


class FieldBuilder(Protocol):
    """Capability that turns a resolved leaf into a message field."""

    def build(self, name: str, type_name: str, node: Element) -> MessageField: ...


class MessageFieldBuilder:
    """Builds plain message fields from leaf elements."""

    def build(self, name: str, type_name: str, node: Element) -> MessageField:
        return MessageField(name=name, type_name=type_name, node=node)
