"""
Federation scaffold assembler: adds the declarations every subgraph exposes.

Adds the ``_Any`` and ``FieldSet`` scalars, the ``_Entity`` union built from
the entity registry, the ``_entities`` query field and the ``@key`` /
``@shareable`` directive definitions.
"""

from __future__ import annotations

import logging

from graphql.language import (
    DirectiveDefinitionNode,
    FieldDefinitionNode,
    InputValueDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
    parse,
    parse_type,
)

from ..config import CollisionPolicy, EmptyEntityPolicy
from ..errors import InvalidSchemaError, NameCollisionError, PipelineInvariantError
from ..schema_ast.nodes import SchemaDocument, name_node, named_type, replace_node
from .entity_classifier import EntityRegistry

logger = logging.getLogger(__name__)

ANY_SCALAR = "_Any"
FIELD_SET_SCALAR = "FieldSet"
ENTITY_UNION = "_Entity"
ENTITIES_FIELD = "_entities"

FEDERATION_DIRECTIVES_SDL = """
directive @key(fields: FieldSet!, resolvable: Boolean = true) repeatable on OBJECT | INTERFACE

directive @shareable repeatable on OBJECT | FIELD_DEFINITION
"""


def _federation_directive_definitions() -> list[DirectiveDefinitionNode]:
    return [definition for definition in parse(FEDERATION_DIRECTIVES_SDL, no_location=True).definitions]


def entities_field() -> FieldDefinitionNode:
    """Build ``_entities(representations: [_Any!]!): [_Entity]!``."""
    return FieldDefinitionNode(
        name=name_node(ENTITIES_FIELD),
        arguments=(
            InputValueDefinitionNode(
                name=name_node("representations"),
                type=parse_type(f"[{ANY_SCALAR}!]!"),
                directives=(),
            ),
        ),
        type=parse_type(f"[{ENTITY_UNION}]!"),
        directives=(),
    )


class FederationScaffoldAssembler:
    """Adds the federation declarations to a document cleaned of composition artifacts."""

    def __init__(
        self,
        collision_policy: CollisionPolicy = CollisionPolicy.ERROR,
        empty_entity_policy: EmptyEntityPolicy = EmptyEntityPolicy.EMIT,
    ):
        self.collision_policy = collision_policy
        self.empty_entity_policy = empty_entity_policy

    def run(self, document: SchemaDocument, registry: EntityRegistry) -> SchemaDocument:
        """
        Add the federation scaffold.

        Args:
            document: Document without composition artifacts
            registry: Entity names recorded by the entity classifier

        Returns:
            The document with the federation declarations added

        Raises:
            NameCollisionError: If a declaration to add already exists and the
                collision policy is ``error``
            InvalidSchemaError: If there is no entity and the empty entity
                policy is ``error``
            PipelineInvariantError: If an entity name or the query type does
                not resolve in the document
        """
        query_type = document.query_type
        if query_type is None:
            raise PipelineInvariantError(f"Query type '{document.root_types.query}' is missing from the document")

        if not registry and self.empty_entity_policy == EmptyEntityPolicy.ERROR:
            raise InvalidSchemaError("No type declares a key: the subgraph schema would have no entity")
        with_entities = bool(registry) or self.empty_entity_policy == EmptyEntityPolicy.EMIT

        types = dict(document.types)
        self._add_type(types, ScalarTypeDefinitionNode(name=name_node(ANY_SCALAR), directives=()))
        self._add_type(types, ScalarTypeDefinitionNode(name=name_node(FIELD_SET_SCALAR), directives=()))

        if with_entities:
            self._add_type(types, self._entity_union(document, registry))
            types[query_type.name.value] = self._with_entities_field(query_type)
        else:
            logger.debug("No entity found, leaving out %s and %s", ENTITY_UNION, ENTITIES_FIELD)

        return document.replace(
            types=types,
            directive_definitions=self._with_federation_directives(document.directive_definitions),
        )

    def _entity_union(self, document: SchemaDocument, registry: EntityRegistry) -> UnionTypeDefinitionNode:
        members = []
        for name in registry:
            if not isinstance(document.get_type(name), ObjectTypeDefinitionNode):
                raise PipelineInvariantError(f"Entity '{name}' does not resolve to an object type in the document")
            members.append(named_type(name))
        logger.debug("%s members: %s", ENTITY_UNION, ", ".join(registry.names()) or "<none>")
        # Members are referenced by name, the object types stay owned by the type mapping
        return UnionTypeDefinitionNode(name=name_node(ENTITY_UNION), directives=(), types=tuple(members))

    def _add_type(self, types: dict[str, TypeDefinitionNode], node: TypeDefinitionNode) -> None:
        name = node.name.value
        if name in types and self.collision_policy == CollisionPolicy.ERROR:
            raise NameCollisionError("type", name)
        types[name] = node

    def _with_entities_field(self, query_type: ObjectTypeDefinitionNode) -> ObjectTypeDefinitionNode:
        fields = tuple(query_type.fields or ())
        if any(field.name.value == ENTITIES_FIELD for field in fields):
            if self.collision_policy == CollisionPolicy.ERROR:
                raise NameCollisionError("query field", ENTITIES_FIELD)
            fields = tuple(field for field in fields if field.name.value != ENTITIES_FIELD)
        return replace_node(query_type, fields=fields + (entities_field(),))

    def _with_federation_directives(
        self, definitions: tuple[DirectiveDefinitionNode, ...]
    ) -> tuple[DirectiveDefinitionNode, ...]:
        added = _federation_directive_definitions()
        added_names = {definition.name.value for definition in added}
        kept = []
        for definition in definitions:
            if definition.name.value in added_names:
                if self.collision_policy == CollisionPolicy.ERROR:
                    raise NameCollisionError("directive", definition.name.value)
                continue
            kept.append(definition)
        return tuple(kept) + tuple(added)
