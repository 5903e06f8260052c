"""Type flattening exports."""

from .message_fields import FieldBuilder, MessageField, MessageFieldBuilder
from .type_flattener import TypeFlattener
from .xsd_primitives import XSD_PRIMITIVE_TYPES, is_primitive_type

__all__ = [
    "FieldBuilder",
    "MessageField",
    "MessageFieldBuilder",
    "TypeFlattener",
    "XSD_PRIMITIVE_TYPES",
    "is_primitive_type",
]
