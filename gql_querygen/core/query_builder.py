"""Query builder for GraphQL operations.

Synthesizes a complete selection set for every root field of a schema,
expanding object, interface and union types down to scalar and enum leaves.
"""

import re
from itertools import combinations
from typing import Iterable

from graphql import (
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    get_named_type,
    is_equal_type,
    is_interface_type,
    is_object_type,
    is_union_type,
)

from .ir import IROperation, OperationKind, TraversalContext
from .options import GeneratorOptions

INDENT = "    "

# Last closing brace of a rendered field, with the whitespace before it
_CLOSING_BRACE = re.compile(r"\n(\s*\})\Z")


class ContractViolation(Exception):
    """Raised when the builder is asked for a field its container lacks."""


def indent(text: str, amount: int = 1) -> str:
    """Prefix every line with `amount` indentation levels."""
    return re.sub(r"^", INDENT * amount, text, flags=re.MULTILINE)


def unindent(text: str, amount: int = 1) -> str:
    """Strip `amount` indentation levels from the start of every line."""
    return re.sub("^" + INDENT * amount, "", text, flags=re.MULTILINE)


def operation_kind(type_name: str) -> OperationKind | None:
    """Match a root type name against the operation kinds, mutation first."""
    lowered = type_name.lower()
    for kind in OperationKind:
        if kind.value in lowered:
            return kind
    return None


class QueryBuilder:
    """Builds GraphQL operation documents from a schema's type graph.

    The schema is never modified. All traversal state lives in a
    TraversalContext created per root field, so one builder can be reused
    for any number of root fields.
    """

    def __init__(self, schema: GraphQLSchema, options: GeneratorOptions | None = None):
        self.schema = schema
        self.options = options or GeneratorOptions()

    def build(self, root_type: GraphQLObjectType, field_name: str) -> IROperation:
        """Build the operation document for one root field.

        Args:
            root_type: The Query, Mutation or Subscription type
            field_name: A field declared on root_type

        Returns:
            The generated operation with its declared variables
        """
        context = TraversalContext()
        selection = self.synthesize(field_name, root_type, root_type.name, context)

        kind = operation_kind(root_type.name)
        keyword = kind.value if kind else root_type.name.lower()
        return IROperation(
            name=field_name,
            keyword=keyword,
            folder=kind.folder if kind else keyword,
            selection=selection,
            variables=list(context.arguments.variables.values()),
        )

    def synthesize(
        self,
        field_name: str,
        container_type: GraphQLObjectType | GraphQLInterfaceType,
        container_name: str,
        context: TraversalContext,
        depth: int = 1,
        from_union: bool = False,
    ) -> str:
        """Render the selection for one field, recursing into its type.

        Args:
            field_name: Field declared on container_type
            container_type: Object or interface type owning the field
            container_name: Name of the parent field (root type name at the top)
            context: Argument table and cross-reference set of this traversal
            depth: Nesting level, 1 for root fields
            from_union: True inside a union member; depth checks are offset by 2

        Returns:
            The indented selection text, or "" when the field is pruned
        """
        field = self._get_field(container_type, field_name)
        field_type = get_named_type(field.type)
        pad = INDENT * depth
        child_query = ""

        if is_object_type(field_type) or is_interface_type(field_type):
            cross_reference_key = f"{container_name}To{field_name}Key"
            effective_depth = depth - 2 if from_union else depth
            if (
                not self.options.include_cross_references
                and cross_reference_key in context.cross_references
            ) or effective_depth > self.options.depth_limit:
                return ""
            if not from_union:
                context.cross_references.add(cross_reference_key)
            child_query = _join(
                self.synthesize(child, field_type, field_name, context, depth + 1, from_union)
                for child in self._visible_fields(field_type)
            )

        query = f"{pad}{field_name}"
        if field.args:
            variables = context.arguments.register(field.args)
            query += "(" + ", ".join(v.call for v in variables) + ")"
        if child_query:
            query += f"{{\n{child_query}\n{pad}}}"

        if is_interface_type(field_type):
            query = self._expand_interface(query, field_type, field_name, context, depth)
        elif is_union_type(field_type):
            query += self._expand_union(field_type, field_name, context, depth)
        return query

    def _expand_interface(
        self,
        query: str,
        interface: GraphQLInterfaceType,
        field_name: str,
        context: TraversalContext,
        depth: int,
    ) -> str:
        """Add __typename and one inline fragment per implementing type.

        Fields declared on the interface are already selected. Fields that
        implementations declare with differing types are aliased as
        '<field>_<TypeName>: <field>' so the fragments do not conflict.
        """
        possible_types = self.schema.get_possible_types(interface)
        if not possible_types:
            return query

        common_fields = set(interface.fields)
        conflict_fields = _conflicting_fields(possible_types)

        fragments = []
        for impl in possible_types:
            lines = []
            for child in self._visible_fields(impl):
                if child in common_fields:
                    continue
                child_query = self.synthesize(child, impl, field_name, context, depth + 1)
                if not child_query:
                    continue
                if child in conflict_fields:
                    child_query = child_query.replace(child, f"{child}_{impl.name}: {child}", 1)
                lines.append(child_query)
            if lines:
                body = unindent("\n".join(lines), depth)
                fragments.append(f"... on {impl.name} {{\n{body}\n}}")

        selection = indent("\n".join(["__typename", *fragments]), depth + 1)
        return _CLOSING_BRACE.sub(lambda m: f"\n{selection}\n{m.group(1)}", query, count=1)

    def _expand_union(
        self,
        union: GraphQLUnionType,
        field_name: str,
        context: TraversalContext,
        depth: int,
    ) -> str:
        """Render '{ __typename ... on Member { ... } }' for a union field."""
        members = union.types
        if not members:
            return ""

        pad = INDENT * depth
        fragment_pad = INDENT * (depth + 1)
        parts = ["{\n", f"{fragment_pad}__typename\n"]
        for member in members:
            member_query = _join(
                self.synthesize(child, member, field_name, context, depth + 2, from_union=True)
                for child in self._visible_fields(member)
            )
            # Members without renderable fields get no fragment
            if member_query:
                parts.append(f"{fragment_pad}... on {member.name} {{\n{member_query}\n{fragment_pad}}}\n")
        parts.append(f"{pad}}}")
        return "".join(parts)

    def _visible_fields(self, type_: GraphQLObjectType | GraphQLInterfaceType) -> list[str]:
        """Field names of a type, minus deprecated ones unless included."""
        return [
            name
            for name, field in type_.fields.items()
            if self.options.include_deprecated_fields or field.deprecation_reason is None
        ]

    @staticmethod
    def _get_field(container_type: GraphQLNamedType, field_name: str):
        fields = getattr(container_type, "fields", None)
        if fields is None or field_name not in fields:
            raise ContractViolation(f"Type {container_type} has no field {field_name!r}")
        return fields[field_name]


def _join(selections: Iterable[str]) -> str:
    return "\n".join(s for s in selections if s)


def _conflicting_fields(types: Iterable[GraphQLObjectType]) -> set[str]:
    """Names declared with non-equal types by at least two of `types`."""
    declared: dict[str, list] = {}
    for type_ in types:
        for name, field in type_.fields.items():
            declared.setdefault(name, []).append(field.type)
    return {
        name
        for name, field_types in declared.items()
        if any(not is_equal_type(a, b) for a, b in combinations(field_types, 2))
    }
