"""
Schema printer: SchemaDocument to SDL text.

Directive usages are part of the AST nodes, so ``print_ast`` renders them
inline. The optional generation comment is rendered from a Jinja2 template.
"""

from __future__ import annotations

from pathlib import Path

import jinja2
from graphql.language import DocumentNode, OperationType, OperationTypeDefinitionNode, SchemaDefinitionNode, print_ast

from .builder import DEFAULT_ROOT_TYPES
from .nodes import SchemaDocument, named_type

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"


def _needs_schema_definition(document: SchemaDocument) -> bool:
    if document.schema_directives:
        return True
    return any(DEFAULT_ROOT_TYPES[operation] != name for operation, name in document.root_types.items())


def to_document_node(document: SchemaDocument) -> DocumentNode:
    """Assemble the graphql-core document: schema definition, directives, then types."""
    definitions = []
    if _needs_schema_definition(document):
        definitions.append(
            SchemaDefinitionNode(
                directives=document.schema_directives,
                operation_types=tuple(
                    OperationTypeDefinitionNode(operation=OperationType(operation), type=named_type(name))
                    for operation, name in document.root_types.items()
                ),
            )
        )
    definitions.extend(document.directive_definitions)
    definitions.extend(document.types.values())
    return DocumentNode(definitions=tuple(definitions))


class SchemaPrinter:
    """Prints schema documents, optionally behind a generation comment."""

    def __init__(self):
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.header_template = self.jinja_env.get_template("header.graphql.jinja2")

    def render_header(self, version: str, command_line: str, federation_url: str) -> str:
        return self.header_template.render(version=version, command_line=command_line, federation_url=federation_url)

    def print(self, document: SchemaDocument, header: str = "") -> str:
        """
        Print a document as SDL.

        Args:
            document: The document to print
            header: Comment block put before the SDL, if any

        Returns:
            The SDL text, ending with a newline
        """
        sdl = print_ast(to_document_node(document)) + "\n"
        if header:
            return f"{header.rstrip()}\n\n{sdl}"
        return sdl
