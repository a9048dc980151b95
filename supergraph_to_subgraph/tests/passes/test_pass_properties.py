"""
Properties that hold across the pass sequence.
"""

import pytest

from supergraph_to_subgraph.pipeline import SplitterConfig, SubgraphGenerator
from supergraph_to_subgraph.pipeline.config import MarkerSelection
from supergraph_to_subgraph.pipeline.errors import PipelineInvariantError
from supergraph_to_subgraph.pipeline.passes import (
    CompositionArtifactStripper,
    CompositionTypeEliminator,
    EntityClassifier,
    SchemaMapper,
)
from supergraph_to_subgraph.pipeline.schema_ast.nodes import SchemaDocument, is_composition_internal, name_node

TYPES = """
type Query @join__type(graph: A) @join__type(graph: B) { product: Product review: Review }
type Mutation @join__type(graph: A) { rate(id: ID!): Review }
type Product @join__type(graph: A, key: "id") @join__type(graph: B, key: "id") { id: ID! @join__field(graph: B) }
type Review @join__type(graph: B) @join__type(graph: A, key: "id") { id: ID! body: String }
type Money @join__type(graph: A) { amount: Float }
enum Color @join__type(graph: A) { RED @join__enumValue(graph: A) }
"""


def all_directive_names(document):
    """Names of every directive usage in the document, at any depth."""
    names = [directive.name.value for directive in document.schema_directives]
    for node in document.types.values():
        names.extend(directive.name.value for directive in node.directives or ())
        for member in getattr(node, "fields", None) or getattr(node, "values", None) or ():
            names.extend(directive.name.value for directive in member.directives or ())
            for argument in getattr(member, "arguments", None) or ():
                names.extend(directive.name.value for directive in argument.directives or ())
    return names


def prune(document):
    return CompositionTypeEliminator().run(CompositionArtifactStripper().run(document))


def test_pruning_is_idempotent(make_supergraph):
    once = prune(make_supergraph(TYPES))
    twice = prune(once)

    assert list(twice.types) == list(once.types)
    assert all(twice.types[name] is node for name, node in once.types.items())
    assert twice.directive_definitions == once.directive_definitions


def test_no_composition_names_left(make_supergraph):
    pruned = prune(make_supergraph(TYPES))

    assert not any(is_composition_internal(name) for name in all_directive_names(pruned))
    assert not any(is_composition_internal(name) for name in pruned.types)
    assert not any(is_composition_internal(d.name.value) for d in pruned.directive_definitions)


@pytest.mark.parametrize("marker_selection", list(MarkerSelection))
def test_entity_union_matches_keyed_object_types(make_supergraph, marker_selection):
    generator = SubgraphGenerator(SplitterConfig(marker_selection=marker_selection))

    document = generator.transform(make_supergraph(TYPES))

    keyed = [
        name
        for name, node in document.types.items()
        if any(directive.name.value == "key" for directive in node.directives or ())
    ]
    members = [member.name.value for member in document.types["_Entity"].types]
    assert members == keyed
    expected = ["Product"] if marker_selection == MarkerSelection.FIRST else ["Product", "Review"]
    assert members == expected


def test_roots_are_pure(make_supergraph):
    document = SubgraphGenerator().transform(make_supergraph(TYPES))

    assert document.types["Query"].directives == ()
    assert document.types["Mutation"].directives == ()


def test_shareable_fallback(make_supergraph):
    document = SubgraphGenerator().transform(make_supergraph(TYPES))

    assert [d.name.value for d in document.types["Money"].directives] == ["shareable"]
    assert [d.name.value for d in document.types["Review"].directives] == ["shareable"]


def test_entities_field_shape(make_supergraph):
    document = SubgraphGenerator().transform(make_supergraph(TYPES))

    entities = [field for field in document.types["Query"].fields if field.name.value == "_entities"]
    assert len(entities) == 1
    (field,) = entities
    assert field.type.kind == "non_null_type"
    assert field.type.type.kind == "list_type"
    assert field.type.type.type.name.value == "_Entity"
    (argument,) = field.arguments
    assert argument.name.value == "representations"
    assert argument.type.type.type.type.name.value == "_Any"


def test_classifier_before_stripper(make_supergraph):
    """Classification needs the markers the stripper removes"""
    stripped = CompositionArtifactStripper().run(make_supergraph(TYPES))

    _, registry = EntityClassifier().run(stripped)

    assert len(registry) == 0


def test_unknown_type_definition_variant():
    class UnknownDefinition:
        name = name_node("Weird")
        directives = ()

    document = SchemaDocument(types={"Weird": UnknownDefinition()})

    with pytest.raises(PipelineInvariantError, match="UnknownDefinition"):
        SchemaMapper().apply(document)
