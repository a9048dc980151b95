"""
Builds a SchemaDocument from a parsed graphql-core DocumentNode.

Type extensions are folded into the type they extend. An extension whose
type is never defined becomes the definition, the way federation 1 service
schemas declare entities with ``extend type``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graphql.language import (
    ConstDirectiveNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    ExecutableDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeDefinitionNode,
    TypeExtensionNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
)

from .nodes import RootTypes, SchemaDocument, replace_node

_DEFINITION_FOR_EXTENSION = {
    ObjectTypeExtensionNode: ObjectTypeDefinitionNode,
    InterfaceTypeExtensionNode: InterfaceTypeDefinitionNode,
    EnumTypeExtensionNode: EnumTypeDefinitionNode,
    ScalarTypeExtensionNode: ScalarTypeDefinitionNode,
    UnionTypeExtensionNode: UnionTypeDefinitionNode,
    InputObjectTypeExtensionNode: InputObjectTypeDefinitionNode,
}

_KIND_NAMES = {
    ObjectTypeDefinitionNode: "object",
    InterfaceTypeDefinitionNode: "interface",
    EnumTypeDefinitionNode: "enum",
    ScalarTypeDefinitionNode: "scalar",
    UnionTypeDefinitionNode: "union",
    InputObjectTypeDefinitionNode: "input object",
}

# Node attributes an extension appends to
_EXTENDED_KEYS = ("directives", "interfaces", "fields", "values", "types")

DEFAULT_ROOT_TYPES = {"query": "Query", "mutation": "Mutation", "subscription": "Subscription"}


@dataclass
class SchemaDefinitions:
    """Definitions of a schema document, grouped and with extensions folded."""

    types: dict[str, TypeDefinitionNode] = field(default_factory=dict)
    directive_definitions: list[DirectiveDefinitionNode] = field(default_factory=list)
    schema_directives: list[ConstDirectiveNode] = field(default_factory=list)
    operation_types: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def root_types(self) -> RootTypes:
        """Explicit root types if the schema declares any, conventional names otherwise."""
        if self.operation_types:
            return RootTypes(
                query=self.operation_types.get("query"),
                mutation=self.operation_types.get("mutation"),
                subscription=self.operation_types.get("subscription"),
            )
        defaults = {operation: name if name in self.types else None for operation, name in DEFAULT_ROOT_TYPES.items()}
        return RootTypes(**defaults)

    def to_schema_document(self) -> SchemaDocument:
        return SchemaDocument(
            types=dict(self.types),
            directive_definitions=tuple(self.directive_definitions),
            schema_directives=tuple(self.schema_directives),
            root_types=self.root_types(),
        )


def _extend(base: TypeDefinitionNode, extension: TypeExtensionNode) -> TypeDefinitionNode:
    changes = {}
    for key in _EXTENDED_KEYS:
        if key in base.keys:
            changes[key] = tuple(getattr(base, key, None) or ()) + tuple(getattr(extension, key, None) or ())
    return replace_node(base, **changes)


def _definition_from_extension(extension: TypeExtensionNode) -> TypeDefinitionNode:
    definition_class = _DEFINITION_FOR_EXTENSION[type(extension)]
    values = {key: getattr(extension, key, None) for key in definition_class.keys if key not in ("description", "loc")}
    return definition_class(**values)


def collect_definitions(document: DocumentNode) -> SchemaDefinitions:
    """
    Group the definitions of a schema document.

    Problems that validation cannot see once extensions are folded (duplicate
    type names, extensions of the wrong kind, executable definitions) are
    recorded in ``errors`` instead of raised.

    Args:
        document: Parsed schema document

    Returns:
        The grouped definitions
    """
    result = SchemaDefinitions()
    pending_extensions: list[TypeExtensionNode] = []

    for definition in document.definitions:
        if isinstance(definition, (SchemaDefinitionNode, SchemaExtensionNode)):
            for operation_type in definition.operation_types or ():
                result.operation_types[operation_type.operation.value] = operation_type.type.name.value
            result.schema_directives.extend(definition.directives or ())
        elif isinstance(definition, TypeDefinitionNode):
            name = definition.name.value
            if name in result.types:
                result.errors.append(f'There can be only one type named "{name}".')
                continue
            result.types[name] = definition
        elif isinstance(definition, TypeExtensionNode):
            pending_extensions.append(definition)
        elif isinstance(definition, DirectiveDefinitionNode):
            result.directive_definitions.append(definition)
        elif isinstance(definition, ExecutableDefinitionNode):
            result.errors.append(f"Executable definitions are not allowed in a schema: found {definition.kind}.")

    # Extensions apply after every definition has been seen, whatever their position
    for extension in pending_extensions:
        name = extension.name.value
        definition_class = _DEFINITION_FOR_EXTENSION[type(extension)]
        base = result.types.get(name)
        if base is None:
            result.types[name] = _definition_from_extension(extension)
        elif not isinstance(base, definition_class):
            result.errors.append(f'Cannot extend non-{_KIND_NAMES[definition_class]} type "{name}".')
        else:
            result.types[name] = _extend(base, extension)

    return result
