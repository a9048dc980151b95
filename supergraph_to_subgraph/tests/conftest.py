from pathlib import Path

import pytest
from graphql.language import parse

from supergraph_to_subgraph.pipeline.schema_ast import SchemaDocument, collect_definitions

TEST_DATA = Path(__file__).parent / "test_data"
SCHEMAS = TEST_DATA / "schemas"


def document_from_sdl(sdl: str) -> SchemaDocument:
    """Build a SchemaDocument straight from SDL, without composition."""
    return collect_definitions(parse(sdl)).to_schema_document()


def supergraph_sdl(types: str) -> str:
    """Prepend the join__* declarations to supergraph types."""
    return (SCHEMAS / "join_preamble.graphql").read_text(encoding="utf-8") + "\n" + types


@pytest.fixture
def make_document():
    return document_from_sdl


@pytest.fixture
def make_supergraph():
    return lambda types: document_from_sdl(supergraph_sdl(types))


@pytest.fixture
def products_supergraph_sdl() -> str:
    return (SCHEMAS / "products.supergraph.graphql").read_text(encoding="utf-8")


@pytest.fixture
def products_service_sdl() -> str:
    return (SCHEMAS / "products.service.graphql").read_text(encoding="utf-8")
