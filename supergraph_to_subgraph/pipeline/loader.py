"""
Schema loader: source text in, composed SchemaDocument out.

Service schemas go through the single-service composer. Schemas that
already declare the ``join__type`` directive are taken as composed
supergraphs and are only checked against the SDL validation rules.
"""

from __future__ import annotations

import logging

from graphql import GraphQLError
from graphql.language import DirectiveDefinitionNode, DocumentNode, parse
from graphql.validation.validate import validate_sdl

from .composition import ServiceComposer
from .config import InputKind, SplitterConfig
from .errors import CompositionError
from .schema_ast.builder import collect_definitions
from .schema_ast.nodes import SchemaDocument

logger = logging.getLogger(__name__)


def declares_supergraph(document: DocumentNode) -> bool:
    """Check whether a parsed schema carries the composition directives."""
    return any(isinstance(definition, DirectiveDefinitionNode) and definition.name.value == "join__type" for definition in document.definitions)


class SchemaLoader:
    """Loads schema source text into a composed SchemaDocument."""

    def __init__(self, config: SplitterConfig):
        self.config = config
        self.composer = ServiceComposer(config.service_name)

    def load(self, source: str) -> SchemaDocument:
        """
        Parse and compose a schema.

        Args:
            source: Schema source text

        Returns:
            The composed supergraph document

        Raises:
            CompositionError: If the schema cannot be parsed, validated or composed
        """
        try:
            document = parse(source)
        except GraphQLError as error:
            raise CompositionError([str(error)]) from error

        input_kind = self.config.input_kind
        if input_kind == InputKind.AUTO:
            input_kind = InputKind.SUPERGRAPH if declares_supergraph(document) else InputKind.SERVICE
        logger.debug("Loading schema as %s", input_kind.value)

        if input_kind == InputKind.SERVICE:
            return self.composer.compose(document)
        return self._load_supergraph(document)

    def _load_supergraph(self, document: DocumentNode) -> SchemaDocument:
        definitions = collect_definitions(document)
        # SDL validation already reports duplicate types and bad extensions
        errors = [error.message for error in validate_sdl(document)] or definitions.errors
        if errors:
            raise CompositionError(errors)
        return definitions.to_schema_document()
