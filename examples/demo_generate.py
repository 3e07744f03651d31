#!/usr/bin/env python3
"""Demonstration of query document generation.

This script shows how to:
1. Build a schema from SDL text
2. Generate a document for every root field
3. Inspect the generated documents in memory

Note: nothing is written to disk; see `gql-querygen generate` for that.
"""

from gql_querygen.core import (
    GeneratorOptions,
    MemorySink,
    QueryGenerator,
    SchemaParser,
)

SDL = """
interface Node { id: ID! }

type User implements Node {
    id: ID!
    name: String
    friends(first: Int): [User!]!
}

type Post implements Node {
    id: ID!
    title: String
    author: User
}

union SearchResult = User | Post

type Query {
    node(id: ID!): Node
    search(text: String!, first: Int): [SearchResult!]!
}
"""


def main():
    schema = SchemaParser.from_source(SDL)
    sink = MemorySink()
    generator = QueryGenerator(schema, sink, options=GeneratorOptions(depth_limit=3))

    for operation in generator.generate():
        print(f"# {operation.folder}/{operation.filename('gql')}")
        print(operation.document)
        print()


if __name__ == "__main__":
    main()
