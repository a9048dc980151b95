"""
Tests for the atomic schema writer.
"""

from unittest import mock

import pytest

from supergraph_to_subgraph.pipeline.errors import PipelineInvariantError
from supergraph_to_subgraph.pipeline.writer import AtomicWriter, validate_schema_text

SCHEMA = "type Query {\n  a: Int\n}\n"


class TestValidateSchemaText:
    def test_valid(self):
        validate_schema_text(SCHEMA)

    def test_memberless_union_is_accepted(self):
        validate_schema_text("union _Entity\n\ntype Query {\n  _entities: [_Entity]!\n}\n")

    def test_syntax_error(self):
        with pytest.raises(PipelineInvariantError, match="not valid GraphQL"):
            validate_schema_text("type Query {")

    def test_sdl_error(self):
        with pytest.raises(PipelineInvariantError, match="not valid GraphQL"):
            validate_schema_text("type Query { a: Missing }")


class TestAtomicWriter:
    def test_write(self, tmp_path):
        target = tmp_path / "nested" / "subgraph.graphql"

        AtomicWriter().write(target, SCHEMA)

        assert target.read_text() == SCHEMA
        assert [p.name for p in target.parent.iterdir()] == ["subgraph.graphql"]

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "subgraph.graphql"
        target.write_text("old")

        AtomicWriter().write(target, SCHEMA)

        assert target.read_text() == SCHEMA

    def test_invalid_content_leaves_target_untouched(self, tmp_path):
        target = tmp_path / "subgraph.graphql"
        target.write_text("old")

        with pytest.raises(PipelineInvariantError):
            AtomicWriter().write(target, "type Query {")

        assert target.read_text() == "old"

    def test_validation_can_be_skipped(self, tmp_path):
        target = tmp_path / "subgraph.graphql"

        AtomicWriter().write(target, "not graphql", validate=False)

        assert target.read_text() == "not graphql"

    def test_custom_validator(self, tmp_path):
        validator = mock.Mock()

        AtomicWriter(validate_content=validator).write(tmp_path / "out.graphql", SCHEMA)

        validator.assert_called_once_with(SCHEMA)

    def test_non_atomic_write(self, tmp_path):
        target = tmp_path / "subgraph.graphql"

        AtomicWriter().write(target, SCHEMA, atomic=False)

        assert target.read_text() == SCHEMA

    def test_temporary_file_removed_on_failure(self, tmp_path):
        target = tmp_path / "subgraph.graphql"

        with mock.patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                AtomicWriter().write(target, SCHEMA)

        assert list(tmp_path.iterdir()) == []
