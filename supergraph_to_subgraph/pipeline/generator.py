"""
Subgraph generator: runs the whole pipeline.

1. Loader: parse and compose the source schema into a supergraph document
2. Passes: rewrite the supergraph document into a subgraph document
3. Printer: render the subgraph document as SDL
4. Writer: optional atomic write of the result
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import __version__
from .config import SplitterConfig
from .loader import SchemaLoader
from .passes import (
    CompositionArtifactStripper,
    CompositionTypeEliminator,
    EntityClassifier,
    FederationScaffoldAssembler,
    RootSanitizer,
    SchemaAnnotator,
)
from .schema_ast import SchemaDocument, SchemaPrinter
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class SubgraphGenerator:
    """Turns a supergraph (or single service) schema into a federation subgraph schema."""

    def __init__(self, config: SplitterConfig | None = None):
        self.config = config or SplitterConfig()
        self.loader = SchemaLoader(self.config)
        self.printer = SchemaPrinter()

    def load(self, source: str) -> SchemaDocument:
        return self.loader.load(source)

    def transform(self, document: SchemaDocument) -> SchemaDocument:
        """
        Rewrite a supergraph document into a subgraph document.

        The passes run in a fixed order: every pass gets the whole document
        produced by the previous one.

        Args:
            document: Composed supergraph document

        Returns:
            The subgraph document
        """
        document = SchemaAnnotator(self.config.federation_url).run(document)
        document, registry = EntityClassifier(self.config.marker_selection).run(document)
        logger.debug("Entities: %s", ", ".join(registry) or "<none>")
        document = CompositionArtifactStripper().run(document)
        document = RootSanitizer().run(document)
        document = CompositionTypeEliminator().run(document)
        document = FederationScaffoldAssembler(
            collision_policy=self.config.collision_policy,
            empty_entity_policy=self.config.empty_entity_policy,
        ).run(document, registry)
        return document

    def generate(self, source: str, command_line: str = "supergraph_to_subgraph") -> str:
        """
        Generate the subgraph schema text for a schema source.

        Args:
            source: Supergraph or service schema source text
            command_line: Command line shown in the generation comment

        Returns:
            The subgraph schema SDL
        """
        document = self.transform(self.load(source))
        header = ""
        if self.config.add_generation_comment:
            header = self.printer.render_header(__version__, command_line, self.config.federation_url)
        return self.printer.print(document, header)

    def generate_file(self, source_path: Path, target_path: Path, command_line: str = "supergraph_to_subgraph") -> str:
        """Read a schema file, generate its subgraph schema and write it to ``target_path``."""
        source = Path(source_path).read_text(encoding="utf-8")
        output = self.generate(source, command_line)
        AtomicWriter().write(
            Path(target_path),
            output,
            validate=self.config.output.validate_before_write,
            atomic=self.config.output.atomic_write,
        )
        logger.info("Generated subgraph schema %s from %s", target_path, source_path)
        return output
