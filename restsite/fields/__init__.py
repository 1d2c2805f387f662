"""Page field schemas: declarations of the structured content each template expects."""

from restsite.fields.registry import SchemaRegistry, build_registry
from restsite.fields.schema import (
    FieldDefinition,
    FieldKind,
    FieldSchema,
    FieldValue,
    GroupEntry,
    GroupField,
    GroupOptions,
    PageTemplate,
    ScalarField,
)

__all__ = [
    "FieldDefinition",
    "FieldKind",
    "FieldSchema",
    "FieldValue",
    "GroupEntry",
    "GroupField",
    "GroupOptions",
    "PageTemplate",
    "ScalarField",
    "SchemaRegistry",
    "build_registry",
]
