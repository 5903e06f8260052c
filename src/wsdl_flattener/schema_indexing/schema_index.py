"""Per-document lookup cache for named schema constructs."""

from __future__ import annotations

import logging
import weakref
from enum import Enum
from xml.etree.ElementTree import Element

from wsdl_flattener.document_loading.document_models import ParsedDocument

from .xml_names import iter_by_kind

logger = logging.getLogger(__name__)

# Later kinds overwrite earlier ones on the bare-name key.
INDEXED_KINDS: tuple[str, ...] = ("complexType", "simpleType", "element", "message", "part")


class IndexState(str, Enum):
    """Freshness of a schema index relative to its document."""

    FRESH = "FRESH"
    STALE = "STALE"


def cache_key(kind: str, name: str) -> str:
    return f"{kind}:{name}"


class SchemaIndex:
    """Maps `kind:name` and bare names to elements of one parsed document.

    The index keeps only a weak reference to its document. A stale index is
    rebuilt synchronously by the next lookup. Instances are not thread-safe.
    """

    def __init__(self, document: ParsedDocument | None = None) -> None:
        self._document_ref: weakref.ReferenceType[ParsedDocument] | None = None
        self._entries: dict[str, Element] = {}
        self._state = IndexState.STALE
        if document is not None:
            self.attach(document)

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def document(self) -> ParsedDocument | None:
        if self._document_ref is None:
            return None
        return self._document_ref()

    def __len__(self) -> int:
        return len(self._entries)

    def attach(self, document: ParsedDocument) -> None:
        """Point the index at a new document and build it eagerly."""
        self._document_ref = weakref.ref(document)
        self._entries.clear()
        self._state = IndexState.STALE
        self.build()

    def mark_stale(self) -> None:
        self._state = IndexState.STALE

    def invalidate(self) -> None:
        """Drop cached entries and detach from the current document."""
        self._document_ref = None
        self._entries.clear()
        self._state = IndexState.FRESH

    def build(self) -> None:
        """Scan the document for indexed kinds, registering both key forms."""
        entries: dict[str, Element] = {}
        document = self.document
        if document is not None:
            for kind in INDEXED_KINDS:
                for element in iter_by_kind(document.root, kind):
                    name = element.get("name")
                    if not name:
                        continue
                    entries[cache_key(kind, name)] = element
                    entries[name] = element
        self._entries = entries
        self._state = IndexState.FRESH

    def find_by_kind_and_name(self, kind: str, name: str) -> Element | None:
        """Look up an element, preferring callers that know the expected kind."""
        self._ensure_fresh()
        return self._entries.get(cache_key(kind, name))

    def find_by_name(self, name: str) -> Element | None:
        self._ensure_fresh()
        return self._entries.get(name)

    def _ensure_fresh(self) -> None:
        if self._document_ref is not None and self.document is None:
            logger.debug("Indexed document was released; detaching index")
            self.invalidate()
            return
        if self._state is IndexState.STALE:
            logger.warning("Forcing a rebuild of the schema index")
            self.build()
