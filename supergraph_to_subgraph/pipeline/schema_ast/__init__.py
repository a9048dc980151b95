"""
Schema AST module.

Contains the schema document model built on graphql-core nodes, the
builder that groups parsed definitions and the printer.
"""

from __future__ import annotations

from .builder import SchemaDefinitions, collect_definitions
from .nodes import (
    COMPOSITION_PREFIX,
    RootTypes,
    SchemaDocument,
    is_composition_internal,
    replace_node,
)
from .printer import SchemaPrinter, to_document_node

__all__ = [
    "COMPOSITION_PREFIX",
    "RootTypes",
    "SchemaDocument",
    "SchemaDefinitions",
    "SchemaPrinter",
    "collect_definitions",
    "is_composition_internal",
    "replace_node",
    "to_document_node",
]
