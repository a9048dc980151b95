"""
Root sanitizer: root operation types carry no directives in a subgraph.

Composition marks Query/Mutation/Subscription like any other type, so the
entity classifier annotates them too; federation forbids @key and
@shareable there.
"""

from __future__ import annotations

from graphql.language import ObjectTypeDefinitionNode

from ..schema_ast.nodes import SchemaDocument, replace_node
from .base import SchemaMapper


class RootSanitizer(SchemaMapper):
    def run(self, document: SchemaDocument) -> SchemaDocument:
        return self.apply(document)

    def map_root_object(self, node: ObjectTypeDefinitionNode, document: SchemaDocument):
        return replace_node(node, directives=())
