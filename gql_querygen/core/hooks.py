"""Generation hooks for customizing query generation.

Provides protocols for hooks that decide which root fields are generated
and for hooks that transform each document before it is stored.

Example usage:
    from gql_querygen.core.hooks import FieldFilterHook, PostGenerateHook

    # Skip internal root fields
    class SkipInternal(FieldFilterHook):
        def should_generate(self, kind, field_name):
            return not field_name.startswith("_")

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "# Copyright 2024 My Company\\n" + content
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FieldFilterHook(Protocol):
    """Protocol for root-field filter hooks.

    Filter hooks are asked once per root field before its document is
    built. Returning False skips the field entirely (no document and no
    index entry).

    Example:
        class OnlyQueries(FieldFilterHook):
            def should_generate(self, kind: str, field_name: str) -> bool:
                return kind == "queries"
    """

    def should_generate(self, kind: str, field_name: str) -> bool:
        """Called before a root field is generated.

        Args:
            kind: The output folder of the root type (e.g., "queries")
            field_name: The root field name

        Returns:
            True to generate the field
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive each generated document and can
    transform it before it is stored.
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after generation for each document.

        Args:
            filename: The document file name (e.g., "getUser.gql")
            content: The generated document

        Returns:
            The (possibly transformed) document to store
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated documents.

    Example:
        hook = AddHeaderHook("# Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header line to the beginning of the document."""
        header = self.header if self.header.endswith("\n") else self.header + "\n"
        return header + content


class FilterFieldsHook:
    """Built-in hook to filter root fields by name prefix/suffix.

    Example:
        # Skip all root fields starting with underscore
        hook = FilterFieldsHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def should_generate(self, _kind: str, field_name: str) -> bool:
        """Check if a root field should be generated."""
        if self.exclude_prefix and field_name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and field_name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not field_name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not field_name.endswith(self.include_suffix):
            return False
        return True


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.filter_hooks: list[FieldFilterHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_filter_hook(self, hook: FieldFilterHook):
        """Add a root-field filter hook."""
        self.filter_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def should_generate(self, kind: str, field_name: str) -> bool:
        """True when every filter hook accepts the field."""
        return all(hook.should_generate(kind, field_name) for hook in self.filter_hooks)

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
