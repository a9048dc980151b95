"""
Validation of ``@key(fields: ...)`` selections against a built schema.
"""

from __future__ import annotations

from collections.abc import Iterator

from graphql import (
    GraphQLError,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    get_named_type,
    is_leaf_type,
)
from graphql.language import FieldNode, OperationDefinitionNode, SelectionSetNode, parse


def parse_field_set(fields: str) -> SelectionSetNode:
    """
    Parse a field set such as ``"id organization { id }"``.

    Raises:
        GraphQLError: If the text is not a single selection set
    """
    document = parse(f"{{{fields}}}", no_location=True)
    if len(document.definitions) != 1 or not isinstance(document.definitions[0], OperationDefinitionNode):
        raise GraphQLError("a field set must be a plain list of fields")
    return document.definitions[0].selection_set


def _check_selection_set(parent: GraphQLNamedType, selection_set: SelectionSetNode) -> Iterator[str]:
    for selection in selection_set.selections:
        if not isinstance(selection, FieldNode):
            yield "fragments cannot be used in a key"
            continue

        name = selection.name.value
        field = parent.fields.get(name) if isinstance(parent, (GraphQLObjectType, GraphQLInterfaceType)) else None
        if field is None:
            yield f'Cannot query field "{name}" on type "{parent.name}".'
            continue
        if field.args or selection.arguments:
            yield f'field "{parent.name}.{name}" cannot be included because it has arguments.'
            continue

        field_type = get_named_type(field.type)
        if is_leaf_type(field_type):
            if selection.selection_set is not None:
                yield f'Field "{name}" must not have a selection since type "{field_type.name}" has no subfields.'
        elif isinstance(field_type, GraphQLUnionType):
            yield f'field "{parent.name}.{name}" is a union type which is not allowed in a key.'
        elif selection.selection_set is None:
            yield f'Field "{name}" of type "{field_type.name}" must have a selection of subfields.'
        else:
            yield from _check_selection_set(field_type, selection.selection_set)


def validate_key_fields(schema: GraphQLSchema, type_name: str, fields: str) -> list[str]:
    """
    Check that a key field set only selects existing, argument-free fields.

    Args:
        schema: Schema built from the service definitions
        type_name: Type carrying the @key
        fields: Value of the ``fields`` argument

    Returns:
        Problem descriptions, empty when the key is valid
    """
    prefix = f'On type "{type_name}", for @key(fields: "{fields}"): '
    try:
        selection_set = parse_field_set(fields)
    except GraphQLError as error:
        return [f"{prefix}{error.message}"]
    return [f"{prefix}{problem}" for problem in _check_selection_set(schema.get_type(type_name), selection_set)]
