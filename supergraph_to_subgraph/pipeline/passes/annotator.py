"""
Schema annotator: points the schema at the federation spec with @link.
"""

from __future__ import annotations

from graphql.language import ConstDirectiveNode, DirectiveDefinitionNode, StringValueNode

from ..composition.prelude import link_prelude
from ..schema_ast.nodes import SchemaDocument, make_argument, make_directive
from .base import SchemaMapper


class SchemaAnnotator(SchemaMapper):
    """Replaces the schema-level directives with a single federation @link.

    The @link directive and its ``link__*`` argument types are declared
    when the document does not declare them already.
    """

    def __init__(self, federation_url: str):
        self.federation_url = federation_url

    def run(self, document: SchemaDocument) -> SchemaDocument:
        return self.declare_link(self.apply(document))

    def map_schema_directives(self, directives: tuple[ConstDirectiveNode, ...], document: SchemaDocument):
        link = make_directive("link", [make_argument("url", StringValueNode(value=self.federation_url))])
        return (link,)

    def declare_link(self, document: SchemaDocument) -> SchemaDocument:
        directive_definitions = document.directive_definitions
        types = dict(document.types)
        for definition in link_prelude():
            name = definition.name.value
            if isinstance(definition, DirectiveDefinitionNode):
                if document.get_directive_definition(name) is None:
                    directive_definitions += (definition,)
            elif document.get_type(name) is None:
                types[name] = definition
        if directive_definitions is document.directive_definitions and len(types) == len(document.types):
            return document
        return document.replace(types=types, directive_definitions=directive_definitions)
