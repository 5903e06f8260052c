"""Helpers for namespace-agnostic tag and reference names."""

from __future__ import annotations

from collections.abc import Iterator
from xml.etree.ElementTree import Element


def local_name(tag: str) -> str:
    """Strip a `{namespace}` or `prefix:` qualifier from a tag or QName value."""
    if tag.startswith("{"):
        tag = tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


def element_kind(element: Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return local_name(tag)


def iter_by_kind(root: Element, kind: str) -> Iterator[Element]:
    """Yield every element in document order whose local tag name equals kind."""
    for element in root.iter():
        if element_kind(element) == kind:
            yield element


def iter_nearest_by_kind(parent: Element, kind: str) -> Iterator[Element]:
    """Yield the closest descendants of parent with the given kind without descending into them."""
    for child in parent:
        if element_kind(child) == kind:
            yield child
        else:
            yield from iter_nearest_by_kind(child, kind)
