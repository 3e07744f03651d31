"""GraphQL schema loader using graphql-core.

Reads SDL files (or an introspection JSON result) and produces a
read-only GraphQLSchema for query generation.
"""

import json
import logging
import os

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    Source,
    build_ast_schema,
    build_client_schema,
    concat_ast,
    parse,
)

log = logging.getLogger(__name__)

SDL_EXTENSIONS = (".graphql", ".graphqls", ".gql")


class SchemaParseError(Exception):
    """Raised when schema source is malformed or invalid."""

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class SchemaParser:
    """Builds a GraphQLSchema from a schema file or directory."""

    def __init__(self, schema_path: str, assume_valid: bool = False):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.assume_valid = assume_valid

    def parse(self) -> GraphQLSchema:
        """Parse all schema files and return the built schema."""
        if os.path.isfile(self.schema_path) and self.schema_path.endswith(".json"):
            return self._parse_introspection(self.schema_path)

        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaParseError("no schema files found", self.schema_path)

        documents = []
        for file_path in schema_files:
            log.debug("Parsing %s", file_path)
            with open(file_path, encoding="utf-8") as f:
                documents.append(self._parse_document(f.read(), file_path))

        return self._build(concat_ast(documents), self.schema_path)

    @classmethod
    def from_source(cls, sdl: str, assume_valid: bool = False) -> GraphQLSchema:
        """Build a schema from in-memory SDL text."""
        parser = cls("<source>", assume_valid=assume_valid)
        return parser._build(parser._parse_document(sdl, None), None)

    def _collect_schema_files(self) -> list[str]:
        """Collect all SDL files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SDL_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    @staticmethod
    def _parse_document(content: str, path: str | None) -> DocumentNode:
        try:
            return parse(Source(content, path or "GraphQL request"))
        except GraphQLError as e:
            raise SchemaParseError(e.message, path) from e

    def _build(self, document: DocumentNode, path: str | None) -> GraphQLSchema:
        try:
            return build_ast_schema(document, assume_valid_sdl=self.assume_valid)
        except (GraphQLError, TypeError) as e:
            # SDL validation failures surface as TypeError from graphql-core
            raise SchemaParseError(str(e), path) from e

    def _parse_introspection(self, path: str) -> GraphQLSchema:
        """Build a schema from an introspection query result."""
        with open(path, encoding="utf-8") as f:
            try:
                result = json.load(f)
            except json.JSONDecodeError as e:
                raise SchemaParseError(f"invalid JSON: {e}", path) from e

        if isinstance(result, dict) and "data" in result:
            result = result["data"]
        if not isinstance(result, dict) or "__schema" not in result:
            raise SchemaParseError("introspection result has no '__schema' key", path)

        try:
            return build_client_schema(result, assume_valid=self.assume_valid)
        except (GraphQLError, TypeError) as e:
            raise SchemaParseError(str(e), path) from e
