"""
Schema document model shared by every pipeline stage.

The type definitions themselves are graphql-core AST nodes. SchemaDocument
only groups them the way the passes need them: a name-keyed type mapping,
the directive definitions, the schema-level directive usages and the names
of the root operation types.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from graphql.language import (
    ConstArgumentNode,
    ConstDirectiveNode,
    ConstValueNode,
    DirectiveDefinitionNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    NamedTypeNode,
    NameNode,
    Node,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
)

# Every composition-internal type, directive and directive usage uses this prefix
COMPOSITION_PREFIX = "join__"

NodeT = TypeVar("NodeT", bound=Node)

TYPE_DEFINITION_CLASSES = (
    ObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    EnumTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    UnionTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
)


def is_composition_internal(name: str) -> bool:
    """Check whether a type, directive or directive usage name belongs to composition."""
    return name.startswith(COMPOSITION_PREFIX)


def replace_node(node: NodeT, **changes) -> NodeT:
    """Build a copy of a graphql-core node with some attributes replaced.

    The given node is left untouched.
    """
    values = {key: getattr(node, key, None) for key in node.keys}
    values.update(changes)
    return node.__class__(**values)


def name_node(value: str) -> NameNode:
    return NameNode(value=value)


def named_type(name: str) -> NamedTypeNode:
    return NamedTypeNode(name=name_node(name))


def make_argument(name: str, value: ConstValueNode) -> ConstArgumentNode:
    return ConstArgumentNode(name=name_node(name), value=value)


def make_directive(name: str, arguments: Iterable[ConstArgumentNode] = ()) -> ConstDirectiveNode:
    return ConstDirectiveNode(name=name_node(name), arguments=tuple(arguments))


def directive_names(directives: Sequence[ConstDirectiveNode] | None) -> list[str]:
    return [directive.name.value for directive in directives or ()]


def find_directives(node: Node, name: str) -> list[ConstDirectiveNode]:
    """Return the usages of a directive on a node, in declaration order."""
    return [directive for directive in getattr(node, "directives", None) or () if directive.name.value == name]


def argument_map(directive: ConstDirectiveNode) -> dict[str, ConstArgumentNode]:
    """Map argument names to argument nodes, keeping the first of duplicated names."""
    arguments: dict[str, ConstArgumentNode] = {}
    for argument in directive.arguments or ():
        arguments.setdefault(argument.name.value, argument)
    return arguments


def without_composition_directives(
    directives: Sequence[ConstDirectiveNode] | None,
) -> tuple[ConstDirectiveNode, ...]:
    return tuple(directive for directive in directives or () if not is_composition_internal(directive.name.value))


@dataclass(frozen=True)
class RootTypes:
    """Names of the root operation types."""

    query: str | None = "Query"
    mutation: str | None = None
    subscription: str | None = None

    def names(self) -> list[str]:
        return [name for name in (self.query, self.mutation, self.subscription) if name]

    def items(self) -> list[tuple[str, str]]:
        """Operation/type-name pairs for the operations that are present."""
        pairs = [("query", self.query), ("mutation", self.mutation), ("subscription", self.subscription)]
        return [(operation, name) for operation, name in pairs if name]


@dataclass(frozen=True)
class SchemaDocument:
    """Root of a schema being rewritten.

    Instances are never edited. Passes return a new document through
    ``replace`` and build new nodes for every declaration they change.
    """

    types: dict[str, TypeDefinitionNode] = field(default_factory=dict)
    directive_definitions: tuple[DirectiveDefinitionNode, ...] = ()
    schema_directives: tuple[ConstDirectiveNode, ...] = ()
    root_types: RootTypes = field(default_factory=RootTypes)

    def replace(self, **changes) -> SchemaDocument:
        return dataclasses.replace(self, **changes)

    def get_type(self, name: str) -> TypeDefinitionNode | None:
        return self.types.get(name)

    def get_directive_definition(self, name: str) -> DirectiveDefinitionNode | None:
        for definition in self.directive_definitions:
            if definition.name.value == name:
                return definition
        return None

    def is_root_type(self, name: str) -> bool:
        return name in self.root_types.names()

    @property
    def query_type(self) -> ObjectTypeDefinitionNode | None:
        if self.root_types.query is None:
            return None
        node = self.types.get(self.root_types.query)
        return node if isinstance(node, ObjectTypeDefinitionNode) else None
