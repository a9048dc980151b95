"""
Tests for the supergraph_to_subgraph command.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from supergraph_to_subgraph.pipeline import PipelineInvariantError, SubgraphGenerator
from supergraph_to_subgraph.supergraph_to_subgraph import supergraph_to_subgraph

SCHEMAS = Path(__file__).parent / "test_data" / "schemas"

LINKLESS_TYPES = """
type Query @join__type(graph: A) { product: Product }
type Product @join__type(graph: A, key: "id") { id: ID! }
"""

NO_QUERY_SERVICE = """
type Product @key(fields: "id") {
  id: ID!
}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def supergraph_file(tmp_path, products_supergraph_sdl):
    path = tmp_path / "supergraph.graphql"
    path.write_text(products_supergraph_sdl)
    return path


def test_generates_subgraph_file(runner, supergraph_file, tmp_path):
    target = tmp_path / "out" / "subgraph.graphql"

    result = runner.invoke(supergraph_to_subgraph, [str(supergraph_file), str(target)])

    assert result.exit_code == 0, result.output
    content = target.read_text()
    assert content.startswith("# Generated by supergraph_to_subgraph v")
    # Existing input paths are shown by file name
    assert ": supergraph_to_subgraph supergraph.graphql " in content.splitlines()[0]
    assert 'type Product implements Node @key(fields: "id") {' in content
    assert "join__" not in content
    # No temporary file left next to the target
    assert [p.name for p in target.parent.iterdir()] == ["subgraph.graphql"]


def test_paths_from_environment(runner, supergraph_file, tmp_path):
    target = tmp_path / "subgraph.graphql"

    result = runner.invoke(
        supergraph_to_subgraph,
        [],
        env={"INPUT_SCHEMA": str(supergraph_file), "INPUT_TARGET": str(target)},
    )

    assert result.exit_code == 0, result.output
    assert "union _Entity = Product" in target.read_text()


def test_config_file_and_options(runner, supergraph_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"federation_version": "v2.3", "add_generation_comment": False}))
    target = tmp_path / "subgraph.graphql"

    result = runner.invoke(
        supergraph_to_subgraph,
        ["--config", str(config), "--marker-selection", "all", str(supergraph_file), str(target)],
    )

    assert result.exit_code == 0, result.output
    content = target.read_text()
    assert content.startswith("schema @link(")
    assert "https://specs.apollo.dev/federation/v2.3" in content
    assert '@key(fields: "id") @key(fields: "sku", resolvable: false)' in content


def test_invalid_config_value(runner, supergraph_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"marker_selection": "last"}))

    result = runner.invoke(supergraph_to_subgraph, ["-c", str(config), str(supergraph_file), str(tmp_path / "out.graphql")])

    assert result.exit_code == 2
    assert "--config" in result.output


def test_config_must_be_an_object(runner, supergraph_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text("[]")

    result = runner.invoke(supergraph_to_subgraph, ["-c", str(config), str(supergraph_file), str(tmp_path / "out.graphql")])

    assert result.exit_code == 2
    assert "--config" in result.output
    assert "JSON object" in result.output


def test_supergraph_without_link_declarations(runner, tmp_path):
    preamble = (SCHEMAS / "join_preamble.graphql").read_text(encoding="utf-8")
    schema = tmp_path / "supergraph.graphql"
    schema.write_text(preamble + LINKLESS_TYPES)
    target = tmp_path / "subgraph.graphql"

    result = runner.invoke(supergraph_to_subgraph, [str(schema), str(target)])

    assert result.exit_code == 0, result.output
    content = target.read_text()
    assert "directive @link(url: String!" in content
    assert "scalar link__Import" in content
    assert 'type Product @key(fields: "id") {' in content


def test_service_schema_with_service_name(runner, products_service_sdl, tmp_path):
    schema = tmp_path / "products.graphql"
    schema.write_text(products_service_sdl)
    target = tmp_path / "subgraph.graphql"

    result = runner.invoke(supergraph_to_subgraph, ["-s", "products", str(schema), str(target)])

    assert result.exit_code == 0, result.output
    assert "union _Entity = Product | Vendor" in target.read_text()


def test_composition_failure(runner, tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    schema = tmp_path / "products.graphql"
    schema.write_text(NO_QUERY_SERVICE)
    target = tmp_path / "subgraph.graphql"

    result = runner.invoke(supergraph_to_subgraph, ["-s", "products", str(schema), str(target)])

    assert result.exit_code == 1
    assert "[products] No queries found in any subgraph" in result.output
    assert "::error::" not in result.output
    assert not target.exists()


def test_composition_failure_annotation_in_github_actions(runner, tmp_path):
    schema = tmp_path / "products.graphql"
    schema.write_text(NO_QUERY_SERVICE)

    result = runner.invoke(
        supergraph_to_subgraph,
        [str(schema), str(tmp_path / "subgraph.graphql")],
        env={"GITHUB_ACTIONS": "true"},
    )

    assert result.exit_code == 1
    assert "::error::[service] " in result.output


def test_internal_error_exit_code(runner, supergraph_file, tmp_path, monkeypatch):
    def broken(self, document):
        raise PipelineInvariantError("Entity 'Ghost' does not resolve to an object type in the document")

    monkeypatch.setattr(SubgraphGenerator, "transform", broken)

    result = runner.invoke(supergraph_to_subgraph, [str(supergraph_file), str(tmp_path / "subgraph.graphql")])

    assert result.exit_code == 3
    assert "Internal error: Entity 'Ghost'" in result.output


def test_missing_schema_file(runner, tmp_path):
    result = runner.invoke(supergraph_to_subgraph, [str(tmp_path / "missing.graphql"), str(tmp_path / "out.graphql")])

    assert result.exit_code == 2
