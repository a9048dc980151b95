"""
Entity classifier: turns composition markers into federation directives.

Every object type that took part in composition carries ``@join__type``
markers. A marker with a ``key`` argument makes the type an entity and is
rewritten as ``@key``; a marker without one makes the type ``@shareable``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from graphql.language import ConstDirectiveNode, ObjectTypeDefinitionNode

from ..config import MarkerSelection
from ..schema_ast.nodes import SchemaDocument, argument_map, find_directives, make_argument, make_directive, replace_node
from .base import Change, SchemaMapper

logger = logging.getLogger(__name__)

TYPE_MARKER = "join__type"


class EntityRegistry:
    """Ordered set of the type names classified as entities."""

    def __init__(self):
        self._names: dict[str, None] = {}

    def register(self, name: str) -> None:
        self._names.setdefault(name, None)

    def names(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"EntityRegistry({self.names()!r})"


def federation_directive_for(marker: ConstDirectiveNode) -> ConstDirectiveNode:
    """
    Build the federation directive equivalent to a ``join__type`` marker.

    A marker with a ``key`` argument becomes ``@key`` whose ``fields`` is the
    key value and, when present, the ``resolvable`` argument copied as-is.
    Any other marker becomes an argument-less ``@shareable``.

    Args:
        marker: The ``@join__type`` directive usage

    Returns:
        The ``@key`` or ``@shareable`` directive usage
    """
    arguments = argument_map(marker)
    if "key" in arguments:
        key_arguments = [make_argument("fields", arguments["key"].value)]
        if "resolvable" in arguments:
            key_arguments.append(arguments["resolvable"])
        return make_directive("key", key_arguments)
    return make_directive("shareable")


class EntityClassifier(SchemaMapper):
    """Appends @key or @shareable to every object type carrying a composition marker."""

    def __init__(self, marker_selection: MarkerSelection = MarkerSelection.FIRST):
        self.marker_selection = marker_selection
        self.registry = EntityRegistry()

    def run(self, document: SchemaDocument) -> tuple[SchemaDocument, EntityRegistry]:
        """
        Classify every object type of a document.

        Args:
            document: The composed schema document

        Returns:
            The rewritten document and the registry of entity type names, in
            type order
        """
        self.registry = EntityRegistry()
        return self.apply(document), self.registry

    def map_object_type(self, node: ObjectTypeDefinitionNode, document: SchemaDocument):
        markers = find_directives(node, TYPE_MARKER)
        if not markers:
            return Change.UNCHANGED

        if self.marker_selection == MarkerSelection.FIRST:
            # Only the first marker is read, keys declared on later markers are ignored
            emitted = [federation_directive_for(markers[0])]
        else:
            emitted = self._directives_for_all_markers(markers)

        type_name = node.name.value
        if any(directive.name.value == "key" for directive in emitted):
            self.registry.register(type_name)
        logger.debug("Classified %s as %s", type_name, ", ".join(f"@{d.name.value}" for d in emitted))

        return replace_node(node, directives=tuple(node.directives or ()) + tuple(emitted))

    def _directives_for_all_markers(self, markers: list[ConstDirectiveNode]) -> list[ConstDirectiveNode]:
        keys = [federation_directive_for(marker) for marker in markers if "key" in argument_map(marker)]
        return keys or [make_directive("shareable")]
