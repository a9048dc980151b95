"""
Single-service composer.

Composes one federation service schema into the supergraph form: the
service's own types annotated with ``join__*`` markers that record which
graph owns them and with which keys. Federation directive usages and
federation-owned declarations do not survive composition.
"""

from __future__ import annotations

import logging
import re

from graphql import GraphQLError, build_ast_schema, validate_schema
from graphql.language import (
    BooleanValueNode,
    ConstDirectiveNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumValueDefinitionNode,
    EnumValueNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    OperationType,
    OperationTypeDefinitionNode,
    SchemaDefinitionNode,
    StringValueNode,
    TypeDefinitionNode,
    UnionTypeDefinitionNode,
)
from graphql.validation.validate import validate_sdl

from ..errors import CompositionError
from ..schema_ast.builder import SchemaDefinitions, collect_definitions
from ..schema_ast.nodes import (
    RootTypes,
    SchemaDocument,
    argument_map,
    find_directives,
    make_argument,
    make_directive,
    name_node,
    named_type,
    replace_node,
)
from .key_fields import validate_key_fields
from .prelude import (
    FEDERATION_DIRECTIVES,
    FEDERATION_QUERY_FIELDS,
    FEDERATION_TYPES,
    JOIN_SPEC_URL,
    LINK_SPEC_URL,
    federation_prelude,
    supergraph_prelude,
)

logger = logging.getLogger(__name__)

# Field-level federation directive -> (its argument, the @join__field argument it is recorded as)
_FIELD_DIRECTIVE_ARGUMENTS = {
    "requires": ("fields", "requires"),
    "provides": ("fields", "provides"),
    "override": ("from", "override"),
}


def graph_enum_value(service_name: str) -> str:
    """Name of the join__Graph value for a service, e.g. "products-api" -> "PRODUCTS_API"."""
    value = re.sub(r"\W", "_", service_name).upper()
    if not value or value[0].isdigit():
        value = f"_{value}"
    return value


def _without_federation_directives(directives) -> tuple[ConstDirectiveNode, ...]:
    return tuple(directive for directive in directives or () if directive.name.value not in FEDERATION_DIRECTIVES)


class ServiceComposer:
    """Composes a single service schema into a supergraph SchemaDocument."""

    def __init__(self, service_name: str = "service"):
        self.service_name = service_name
        self.graph = graph_enum_value(service_name)

    def compose(self, document: DocumentNode) -> SchemaDocument:
        """
        Validate a service schema and compose it.

        Args:
            document: Parsed service schema

        Returns:
            The supergraph document

        Raises:
            CompositionError: With every problem found, if any
        """
        definitions = collect_definitions(document)
        self._drop_federation_declarations(definitions)

        errors = list(definitions.errors)
        if not errors:
            errors = self._validate(definitions)
        if errors:
            raise CompositionError(f"[{self.service_name}] {message}" for message in errors)

        logger.debug("Composing %d types of service %s", len(definitions.types), self.service_name)
        return self._supergraph(definitions)

    # Validation

    def _drop_federation_declarations(self, definitions: SchemaDefinitions) -> None:
        for name in FEDERATION_TYPES & definitions.types.keys():
            del definitions.types[name]
        definitions.directive_definitions = [
            definition for definition in definitions.directive_definitions if definition.name.value not in FEDERATION_DIRECTIVES
        ]
        query = definitions.root_types().query
        query_type = definitions.types.get(query) if query else None
        if isinstance(query_type, ObjectTypeDefinitionNode):
            fields = tuple(field for field in query_type.fields or () if field.name.value not in FEDERATION_QUERY_FIELDS)
            definitions.types[query] = replace_node(query_type, fields=fields)

    def _validation_document(self, definitions: SchemaDefinitions) -> DocumentNode:
        declared = set(definitions.types) | {definition.name.value for definition in definitions.directive_definitions}
        prelude = [definition for definition in federation_prelude() if definition.name.value not in declared]
        schema_definition = []
        if definitions.operation_types:
            schema_definition.append(self._schema_definition(definitions.root_types(), ()))
        return DocumentNode(
            definitions=tuple(schema_definition) + tuple(definitions.types.values()) + tuple(definitions.directive_definitions) + tuple(prelude)
        )

    def _validate(self, definitions: SchemaDefinitions) -> list[str]:
        document = self._validation_document(definitions)
        errors = [error.message for error in validate_sdl(document)]
        if errors:
            return errors

        try:
            schema = build_ast_schema(document, assume_valid_sdl=True)
        except (GraphQLError, TypeError) as error:
            return [str(error)]
        errors = [error.message for error in validate_schema(schema)]

        if schema.query_type is None:
            errors.append("No queries found in any subgraph: a supergraph must have a query root type.")

        for node in definitions.types.values():
            if not isinstance(node, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode)):
                continue
            for key in find_directives(node, "key"):
                fields = argument_map(key).get("fields")
                if fields is None:
                    continue
                if not isinstance(fields.value, StringValueNode):
                    errors.append(f'On type "{node.name.value}", the @key "fields" argument must be a string.')
                    continue
                errors.extend(validate_key_fields(schema, node.name.value, fields.value.value))
        return errors

    # Supergraph emission

    def _graph_argument(self):
        return make_argument("graph", EnumValueNode(value=self.graph))

    def _join_type(self, **arguments) -> ConstDirectiveNode:
        return make_directive(
            "join__type",
            [self._graph_argument()] + [make_argument(name, value) for name, value in arguments.items()],
        )

    def _type_markers(self, node: TypeDefinitionNode) -> list[ConstDirectiveNode]:
        markers = []
        for key in find_directives(node, "key"):
            key_arguments = argument_map(key)
            arguments = {"key": key_arguments["fields"].value}
            resolvable = key_arguments.get("resolvable")
            # Composition only records the non-default value
            if resolvable is not None and isinstance(resolvable.value, BooleanValueNode) and not resolvable.value.value:
                arguments["resolvable"] = resolvable.value
            markers.append(self._join_type(**arguments))
        return markers or [self._join_type()]

    def _field(self, node: FieldDefinitionNode) -> FieldDefinitionNode:
        join_arguments = {}
        for directive in node.directives or ():
            name = directive.name.value
            if name == "external":
                join_arguments["external"] = BooleanValueNode(value=True)
            elif name in _FIELD_DIRECTIVE_ARGUMENTS:
                source_argument, join_argument = _FIELD_DIRECTIVE_ARGUMENTS[name]
                argument = argument_map(directive).get(source_argument)
                if argument is not None:
                    join_arguments[join_argument] = argument.value

        directives = _without_federation_directives(node.directives)
        if join_arguments:
            join_field = make_directive(
                "join__field",
                [self._graph_argument()] + [make_argument(name, value) for name, value in join_arguments.items()],
            )
            directives += (join_field,)
        arguments = tuple(self._input_value(argument) for argument in node.arguments or ())
        return replace_node(node, directives=directives, arguments=arguments)

    def _input_value(self, node: InputValueDefinitionNode) -> InputValueDefinitionNode:
        return replace_node(node, directives=_without_federation_directives(node.directives))

    def _enum_value(self, node: EnumValueDefinitionNode) -> EnumValueDefinitionNode:
        directives = _without_federation_directives(node.directives) + (make_directive("join__enumValue", [self._graph_argument()]),)
        return replace_node(node, directives=directives)

    def _compose_type(self, node: TypeDefinitionNode) -> TypeDefinitionNode:
        own_directives = _without_federation_directives(node.directives)
        match node:
            case ObjectTypeDefinitionNode() | InterfaceTypeDefinitionNode():
                implements = [
                    make_directive(
                        "join__implements",
                        [self._graph_argument(), make_argument("interface", StringValueNode(value=interface.name.value))],
                    )
                    for interface in node.interfaces or ()
                ]
                return replace_node(
                    node,
                    directives=own_directives + tuple(self._type_markers(node)) + tuple(implements),
                    fields=tuple(self._field(field) for field in node.fields or ()),
                )
            case UnionTypeDefinitionNode():
                members = [
                    make_directive(
                        "join__unionMember",
                        [self._graph_argument(), make_argument("member", StringValueNode(value=member.name.value))],
                    )
                    for member in node.types or ()
                ]
                return replace_node(node, directives=own_directives + (self._join_type(),) + tuple(members))
            case EnumTypeDefinitionNode():
                return replace_node(
                    node,
                    directives=own_directives + (self._join_type(),),
                    values=tuple(self._enum_value(value) for value in node.values or ()),
                )
            case InputObjectTypeDefinitionNode():
                return replace_node(
                    node,
                    directives=own_directives + (self._join_type(),),
                    fields=tuple(self._input_value(field) for field in node.fields or ()),
                )
            case _:
                return replace_node(node, directives=own_directives + (self._join_type(),))

    def _graph_enum(self) -> EnumTypeDefinitionNode:
        join_graph = make_directive(
            "join__graph",
            [make_argument("name", StringValueNode(value=self.service_name)), make_argument("url", StringValueNode(value=""))],
        )
        return EnumTypeDefinitionNode(
            name=name_node("join__Graph"),
            directives=(),
            values=(EnumValueDefinitionNode(name=name_node(self.graph), directives=(join_graph,)),),
        )

    def _schema_definition(self, root_types: RootTypes, directives) -> SchemaDefinitionNode:
        return SchemaDefinitionNode(
            directives=tuple(directives),
            operation_types=tuple(
                OperationTypeDefinitionNode(operation=OperationType(operation), type=named_type(name))
                for operation, name in root_types.items()
            ),
        )

    def _supergraph(self, definitions: SchemaDefinitions) -> SchemaDocument:
        types: dict[str, TypeDefinitionNode] = {name: self._compose_type(node) for name, node in definitions.types.items()}
        directive_definitions: list[DirectiveDefinitionNode] = []
        for definition in supergraph_prelude():
            if isinstance(definition, DirectiveDefinitionNode):
                directive_definitions.append(definition)
            else:
                types[definition.name.value] = definition
        types["join__Graph"] = self._graph_enum()
        directive_definitions.extend(definitions.directive_definitions)

        schema_directives = (
            make_directive("link", [make_argument("url", StringValueNode(value=LINK_SPEC_URL))]),
            make_directive(
                "link",
                [make_argument("url", StringValueNode(value=JOIN_SPEC_URL)), make_argument("for", EnumValueNode(value="EXECUTION"))],
            ),
        )
        return SchemaDocument(
            types=types,
            directive_definitions=tuple(directive_definitions),
            schema_directives=schema_directives,
            root_types=definitions.root_types(),
        )
