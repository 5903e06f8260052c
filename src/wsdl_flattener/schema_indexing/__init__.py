"""Schema indexing exports."""

from .schema_index import INDEXED_KINDS, IndexState, SchemaIndex, cache_key
from .xml_names import element_kind, iter_by_kind, iter_nearest_by_kind, local_name

__all__ = [
    "INDEXED_KINDS",
    "IndexState",
    "SchemaIndex",
    "cache_key",
    "element_kind",
    "iter_by_kind",
    "iter_nearest_by_kind",
    "local_name",
]
