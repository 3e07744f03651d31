"""Tests for generation hooks."""

from gql_querygen.core.hooks import (
    AddHeaderHook,
    FieldFilterHook,
    FilterFieldsHook,
    HookRunner,
    PostGenerateHook,
)


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("# Auto-generated")
        result = hook.post_generate("user.gql", "query user{\n    user\n}")
        assert result.startswith("# Auto-generated\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("# Header")
        content = "query user{\n    user\n}"
        result = hook.post_generate("user.gql", content)
        assert result.endswith(content)

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("# Header\n")
        result = hook.post_generate("user.gql", "doc")
        # Should not double-up newlines
        assert result == "# Header\ndoc"


class TestFilterFieldsHook:
    """Tests for FilterFieldsHook."""

    def test_exclude_prefix(self):
        hook = FilterFieldsHook(exclude_prefix="_")
        assert hook.should_generate("queries", "user")
        assert not hook.should_generate("queries", "_service")

    def test_exclude_suffix(self):
        hook = FilterFieldsHook(exclude_suffix="Internal")
        assert not hook.should_generate("queries", "statsInternal")

    def test_include_prefix(self):
        hook = FilterFieldsHook(include_prefix="get")
        assert hook.should_generate("queries", "getUser")
        assert not hook.should_generate("queries", "listUsers")

    def test_include_suffix(self):
        hook = FilterFieldsHook(include_suffix="Changed")
        assert hook.should_generate("subscriptions", "userChanged")
        assert not hook.should_generate("subscriptions", "userAdded")


class TestHookRunner:
    """Tests for HookRunner."""

    def test_no_hooks_accepts_everything(self):
        assert HookRunner().should_generate("queries", "anything")

    def test_all_filters_must_accept(self):
        runner = HookRunner()
        runner.add_filter_hook(FilterFieldsHook(exclude_prefix="_"))
        runner.add_filter_hook(FilterFieldsHook(include_prefix="get"))
        assert runner.should_generate("queries", "getUser")
        assert not runner.should_generate("queries", "_getUser")
        assert not runner.should_generate("queries", "user")

    def test_multiple_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Line 1"))
        runner.add_post_hook(AddHeaderHook("# Line 0"))

        result = runner.run_post_hooks("user.gql", "doc")
        # Second hook wraps the first
        assert result == "# Line 0\n# Line 1\ndoc"


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_hook(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)

    def test_filter_fields_is_filter_hook(self):
        assert isinstance(FilterFieldsHook(), FieldFilterHook)

    def test_custom_filter_hook(self):
        class OnlyQueries:
            def should_generate(self, kind, field_name):
                return kind == "queries"

        assert isinstance(OnlyQueries(), FieldFilterHook)
