"""Tests for the schema parser."""

import json

import pytest
from graphql import introspection_from_schema

from gql_querygen.core.parser import SchemaParseError, SchemaParser

SDL = """
type User { id: ID! }
type Query { me: User }
"""


class TestFromSource:
    """Tests for building schemas from SDL text."""

    def test_builds_schema(self):
        schema = SchemaParser.from_source(SDL)
        assert schema.query_type.name == "Query"
        assert schema.mutation_type is None

    def test_syntax_error(self):
        with pytest.raises(SchemaParseError):
            SchemaParser.from_source("type Query {")

    def test_unknown_type(self):
        with pytest.raises(SchemaParseError, match="Missing"):
            SchemaParser.from_source("type Query { me: Missing }")


class TestFiles:
    """Tests for file, directory and introspection input."""

    def test_single_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text(SDL)
        schema = SchemaParser(str(path)).parse()
        assert "User" in schema.type_map

    def test_directory_concatenates_files(self, tmp_path):
        (tmp_path / "a_types.graphqls").write_text("type User { id: ID! }")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "b_query.gql").write_text("type Query { me: User }")
        (tmp_path / "README.md").write_text("not a schema")
        schema = SchemaParser(str(tmp_path)).parse()
        assert schema.query_type.fields["me"].type.name == "User"

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "broken.graphql"
        path.write_text("type Query {")
        with pytest.raises(SchemaParseError) as exc_info:
            SchemaParser(str(path)).parse()
        assert exc_info.value.path == str(path)

    def test_empty_directory(self, tmp_path):
        with pytest.raises(SchemaParseError, match="no schema files"):
            SchemaParser(str(tmp_path)).parse()

    @pytest.mark.parametrize("envelope", [True, False])
    def test_introspection_json(self, tmp_path, envelope):
        introspection = introspection_from_schema(SchemaParser.from_source(SDL))
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"data": introspection} if envelope else introspection))
        schema = SchemaParser(str(path)).parse()
        assert schema.query_type.name == "Query"

    def test_introspection_without_schema_key(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"data": {}}))
        with pytest.raises(SchemaParseError, match="__schema"):
            SchemaParser(str(path)).parse()
