"""
Composition type eliminator: removes the ``join__*`` declarations.
"""

from __future__ import annotations

from ..schema_ast.nodes import SchemaDocument, is_composition_internal
from .base import Change, SchemaMapper


def _remove_if_internal(node) -> Change:
    return Change.REMOVE if is_composition_internal(node.name.value) else Change.UNCHANGED


class CompositionTypeEliminator(SchemaMapper):
    """Removes ``join__*`` enum types, scalar types and directive definitions."""

    def run(self, document: SchemaDocument) -> SchemaDocument:
        return self.apply(document)

    def map_enum_type(self, node, document):
        return _remove_if_internal(node)

    def map_scalar_type(self, node, document):
        return _remove_if_internal(node)

    def map_directive_definition(self, node, document):
        return _remove_if_internal(node)
