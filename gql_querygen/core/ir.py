"""Intermediate Representation (IR) for generated GraphQL operations.

This module defines the records threaded through one root-field traversal
(argument table, cross-reference set) and the operation documents produced
from them.
"""

from dataclasses import dataclass, field
from enum import Enum

from graphql import GraphQLArgument


class OperationKind(Enum):
    """Root operation kinds, in the order they are generated."""
    MUTATION = "mutation"
    QUERY = "query"
    SUBSCRIPTION = "subscription"

    @property
    def folder(self) -> str:
        """Output folder name, e.g. 'queries'."""
        return {
            OperationKind.MUTATION: "mutations",
            OperationKind.QUERY: "queries",
            OperationKind.SUBSCRIPTION: "subscriptions",
        }[self]


@dataclass
class IRVariable:
    """A declared operation variable bound to one field argument."""
    name: str  # variable name without '$', e.g. 'id1'
    argument_name: str
    type_name: str  # rendered GraphQL type, e.g. '[ID!]!'

    @property
    def declaration(self) -> str:
        return f"${self.name}: {self.type_name}"

    @property
    def call(self) -> str:
        return f"{self.argument_name}: ${self.name}"


@dataclass
class ArgumentTable:
    """Variables collected during one root-field traversal.

    Variable names are unique. When an argument name was already used by
    another field, the new variable gets a numeric suffix: the first clash
    yields '<name>1' and later clashes continue from the last suffix used.
    Insertion order is declaration order.
    """
    variables: dict[str, IRVariable] = field(default_factory=dict)
    duplicate_counts: dict[str, int] = field(default_factory=dict)

    def register(self, arguments: dict[str, GraphQLArgument]) -> list[IRVariable]:
        """Allocate variables for one field's arguments and merge them in."""
        allocated: dict[str, IRVariable] = {}
        for arg_name, arg in arguments.items():
            var_name = arg_name
            if arg_name in self.duplicate_counts or arg_name in self.variables:
                index = self.duplicate_counts.get(arg_name, 0) + 1
                # Skip suffixes taken by arguments literally named e.g. "id1"
                while f"{arg_name}{index}" in self.variables or f"{arg_name}{index}" in allocated:
                    index += 1
                self.duplicate_counts[arg_name] = index
                var_name = f"{arg_name}{index}"
            allocated[var_name] = IRVariable(
                name=var_name,
                argument_name=arg_name,
                type_name=str(arg.type),
            )
        self.variables.update(allocated)
        return list(allocated.values())

    def declarations(self) -> str:
        """Render the variable header body: '$id: ID!, $name: String'."""
        return ", ".join(v.declaration for v in self.variables.values())

    def __len__(self) -> int:
        return len(self.variables)


@dataclass
class TraversalContext:
    """Mutable state owned by a single root-field traversal."""
    arguments: ArgumentTable = field(default_factory=ArgumentTable)
    # '<parentName>To<fieldName>Key' edges already expanded on this path
    cross_references: set[str] = field(default_factory=set)


@dataclass
class IROperation:
    """A generated operation document for one root field."""
    name: str
    keyword: str  # 'query', 'mutation', 'subscription' or a fallback
    folder: str
    selection: str
    variables: list[IRVariable] = field(default_factory=list)

    @property
    def header(self) -> str:
        if not self.variables:
            return ""
        return "(" + ", ".join(v.declaration for v in self.variables) + ")"

    @property
    def document(self) -> str:
        """The complete GraphQL document text."""
        return f"{self.keyword} {self.name}{self.header}{{\n{self.selection}\n}}"

    def filename(self, extension: str) -> str:
        return f"{self.name}.{extension}"
