"""
Base class for document passes.

A pass walks every declaration of a SchemaDocument and, for each one,
returns either a new node, ``Change.UNCHANGED`` or ``Change.REMOVE``.
The mapper then assembles a new document from the results; the input
document and its nodes are never modified.
"""

from __future__ import annotations

from enum import Enum

from graphql.language import (
    ConstDirectiveNode,
    DirectiveDefinitionNode,
    EnumTypeDefinitionNode,
    EnumValueDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
)

from ..errors import PipelineInvariantError
from ..schema_ast.nodes import SchemaDocument, replace_node


class Change(Enum):
    """Result of a mapper hook that does not build a new node."""

    UNCHANGED = "unchanged"
    REMOVE = "remove"


class SchemaMapper:
    """Rebuilds a SchemaDocument one declaration at a time.

    Subclasses override the ``map_*`` hooks they care about. Every type
    definition variant has its own hook so a new variant cannot slip
    through a pass unnoticed: unknown node classes raise
    PipelineInvariantError.
    """

    _TYPE_HOOKS = {
        ObjectTypeDefinitionNode: "map_object_type",
        InterfaceTypeDefinitionNode: "map_interface_type",
        EnumTypeDefinitionNode: "map_enum_type",
        ScalarTypeDefinitionNode: "map_scalar_type",
        UnionTypeDefinitionNode: "map_union_type",
        InputObjectTypeDefinitionNode: "map_input_object_type",
    }

    def apply(self, document: SchemaDocument) -> SchemaDocument:
        """Run the pass over a whole document and return the rebuilt document."""
        types: dict[str, TypeDefinitionNode] = {}
        for name, node in document.types.items():
            mapped = self._resolve(node, self._map_type(node, document))
            if mapped is None:
                continue
            if isinstance(mapped, EnumTypeDefinitionNode):
                mapped = self._map_enum_values(mapped, document)
            types[name] = mapped

        directive_definitions = []
        for definition in document.directive_definitions:
            mapped = self._resolve(definition, self.map_directive_definition(definition, document))
            if mapped is not None:
                directive_definitions.append(mapped)

        schema_directives = self.map_schema_directives(document.schema_directives, document)
        if schema_directives is Change.UNCHANGED:
            schema_directives = document.schema_directives

        return document.replace(
            types=types,
            directive_definitions=tuple(directive_definitions),
            schema_directives=tuple(schema_directives),
        )

    def _resolve(self, node, result):
        if result is Change.UNCHANGED:
            return node
        if result is Change.REMOVE:
            return None
        return result

    def _map_type(self, node: TypeDefinitionNode, document: SchemaDocument):
        hook_name = self._TYPE_HOOKS.get(type(node))
        if hook_name is None:
            raise PipelineInvariantError(f"Unsupported type definition node {type(node).__name__} for type '{node.name.value}'")
        if hook_name == "map_object_type" and document.is_root_type(node.name.value):
            return self.map_root_object(node, document)
        return getattr(self, hook_name)(node, document)

    def _map_enum_values(self, node: EnumTypeDefinitionNode, document: SchemaDocument) -> EnumTypeDefinitionNode:
        values = []
        changed = False
        for value in node.values or ():
            mapped = self._resolve(value, self.map_enum_value(value, node, document))
            changed = changed or mapped is not value
            if mapped is not None:
                values.append(mapped)
        if not changed:
            return node
        return replace_node(node, values=tuple(values))

    # Hooks. Each returns a new node, Change.UNCHANGED or Change.REMOVE.

    def map_object_type(self, node: ObjectTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_root_object(self, node: ObjectTypeDefinitionNode, document: SchemaDocument):
        """Hook for Query/Mutation/Subscription; falls back to ``map_object_type``."""
        return self.map_object_type(node, document)

    def map_interface_type(self, node: InterfaceTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_enum_type(self, node: EnumTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_scalar_type(self, node: ScalarTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_union_type(self, node: UnionTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_input_object_type(self, node: InputObjectTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_enum_value(self, node: EnumValueDefinitionNode, enum_type: EnumTypeDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_directive_definition(self, node: DirectiveDefinitionNode, document: SchemaDocument):
        return Change.UNCHANGED

    def map_schema_directives(self, directives: tuple[ConstDirectiveNode, ...], document: SchemaDocument):
        """Return the new schema-level directive usages or Change.UNCHANGED."""
        return Change.UNCHANGED
