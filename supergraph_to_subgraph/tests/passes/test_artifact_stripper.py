from supergraph_to_subgraph.pipeline.passes import CompositionArtifactStripper
from supergraph_to_subgraph.pipeline.schema_ast.nodes import directive_names

TYPES = """
directive @auth(role: String) on OBJECT | FIELD_DEFINITION | ARGUMENT_DEFINITION | INPUT_FIELD_DEFINITION
type Query @join__type(graph: A) @auth(role: "user") {
  product(id: ID! @join__field(graph: A) @auth): Product @join__field(graph: A)
}
type Product @join__type(graph: A, key: "id") @key(fields: "id") { id: ID! }
interface Node @join__type(graph: A) { id: ID! @join__field(graph: A) }
union Result @join__type(graph: A) = Product
scalar Date @join__type(graph: A)
input Filter @join__type(graph: A) { name: String @join__field(graph: A) @auth }
enum Color @join__type(graph: A) { RED @join__enumValue(graph: A) @deprecated GREEN }
type Plain { a: Int }
"""


def test_strips_every_composition_usage(make_supergraph):
    document = CompositionArtifactStripper().run(make_supergraph(TYPES))

    types = document.types
    assert directive_names(types["Query"].directives) == ["auth"]
    (product_field,) = types["Query"].fields
    assert directive_names(product_field.directives) == []
    assert directive_names(product_field.arguments[0].directives) == ["auth"]
    assert directive_names(types["Product"].directives) == ["key"]
    assert directive_names(types["Node"].directives) == []
    assert directive_names(types["Node"].fields[0].directives) == []
    assert directive_names(types["Result"].directives) == []
    assert directive_names(types["Date"].directives) == []
    assert directive_names(types["Filter"].fields[0].directives) == ["auth"]
    assert [directive_names(value.directives) for value in types["Color"].values] == [["deprecated"], []]


def test_declarations_are_kept(make_supergraph):
    document = CompositionArtifactStripper().run(make_supergraph(TYPES))

    assert "join__Graph" in document.types
    assert "join__FieldSet" in document.types
    assert document.get_directive_definition("join__type") is not None


def test_unchanged_nodes_are_reused(make_supergraph):
    source = make_supergraph(TYPES)

    document = CompositionArtifactStripper().run(source)

    assert document.types["Plain"] is source.types["Plain"]
    assert document.types["Product"].fields[0] is source.types["Product"].fields[0]


def test_input_document_not_modified(make_supergraph):
    source = make_supergraph(TYPES)

    CompositionArtifactStripper().run(source)

    assert directive_names(source.types["Query"].directives) == ["join__type", "auth"]
    assert directive_names(source.types["Color"].values[0].directives) == ["join__enumValue", "deprecated"]
