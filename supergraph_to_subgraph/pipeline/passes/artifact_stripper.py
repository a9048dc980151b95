"""
Composition artifact stripper: drops every ``join__*`` directive usage.

Only usages are removed here. The ``join__*`` declarations themselves are
removed by CompositionTypeEliminator.
"""

from __future__ import annotations

from graphql.language import (
    EnumValueDefinitionNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    TypeDefinitionNode,
)

from ..schema_ast.nodes import SchemaDocument, is_composition_internal, replace_node, without_composition_directives
from .base import Change, SchemaMapper


def _has_composition_usage(node) -> bool:
    return any(is_composition_internal(directive.name.value) for directive in node.directives or ())


def _strip_input_value(node: InputValueDefinitionNode) -> InputValueDefinitionNode:
    if not _has_composition_usage(node):
        return node
    return replace_node(node, directives=without_composition_directives(node.directives))


def _strip_field(node: FieldDefinitionNode) -> FieldDefinitionNode:
    arguments = tuple(_strip_input_value(argument) for argument in node.arguments or ())
    if not _has_composition_usage(node) and all(new is old for new, old in zip(arguments, node.arguments or ())):
        return node
    return replace_node(node, directives=without_composition_directives(node.directives), arguments=arguments)


class CompositionArtifactStripper(SchemaMapper):
    """Filters ``join__*`` usages off types, fields, arguments, input fields and enum values."""

    def run(self, document: SchemaDocument) -> SchemaDocument:
        return self.apply(document)

    def _strip_type(self, node: TypeDefinitionNode):
        changes = {}
        if _has_composition_usage(node):
            changes["directives"] = without_composition_directives(node.directives)

        members = getattr(node, "fields", None)
        if members:
            strip = _strip_field if isinstance(members[0], FieldDefinitionNode) else _strip_input_value
            stripped = tuple(strip(member) for member in members)
            if any(new is not old for new, old in zip(stripped, members)):
                changes["fields"] = stripped

        if not changes:
            return Change.UNCHANGED
        return replace_node(node, **changes)

    def map_object_type(self, node, document):
        return self._strip_type(node)

    def map_interface_type(self, node, document):
        return self._strip_type(node)

    def map_input_object_type(self, node, document):
        return self._strip_type(node)

    def map_enum_type(self, node, document):
        return self._strip_type(node)

    def map_scalar_type(self, node, document):
        return self._strip_type(node)

    def map_union_type(self, node, document):
        return self._strip_type(node)

    def map_enum_value(self, node: EnumValueDefinitionNode, enum_type, document):
        if not _has_composition_usage(node):
            return Change.UNCHANGED
        return replace_node(node, directives=without_composition_directives(node.directives))
