"""Query document generator for GraphQL schemas.

Builds one operation document per root field and hands it to a sink,
together with Python index modules that re-export the documents.

Supports custom index templates via the template_dir parameter:
    generator = QueryGenerator(schema, sink, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from graphql import GraphQLObjectType, GraphQLSchema
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .hooks import HookRunner
from .ir import IROperation, OperationKind
from .options import GeneratorOptions
from .query_builder import QueryBuilder, operation_kind
from .writer import INDEX_FILENAME, DocumentSink

log = logging.getLogger(__name__)


# Python reserved keywords that cannot be used as module attribute names
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}


def safe_identifier(name: str) -> str:
    """Make a GraphQL name safe as a Python identifier by suffixing keywords."""
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


class QueryGenerator:
    """Generates query documents for every root field of a schema.

    Available templates to override:
        - operations_index.py.j2 - per-kind index re-exporting documents
        - package_index.py.j2 - top-level index importing each kind

    Example:
        generator = QueryGenerator(
            schema=schema,
            sink=FileSystemSink("./generated"),
            options=GeneratorOptions(depth_limit=5),
        )
        generator.generate()
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        sink: DocumentSink,
        options: Optional[GeneratorOptions] = None,
        hooks: Optional[HookRunner] = None,
        template_dir: Optional[str] = None,
    ):
        """Initialize the generator.

        Args:
            schema: The schema to generate documents for
            sink: Destination for documents and index modules
            options: Generation options (defaults apply when omitted)
            hooks: Optional filter and post-generation hooks
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.schema = schema
        self.sink = sink
        self.options = options or GeneratorOptions()
        self.hooks = hooks or HookRunner()
        self.builder = QueryBuilder(schema, self.options)

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_querygen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["repr"] = repr

    def generate(self) -> List[IROperation]:
        """Generate documents for all root types and write the indexes."""
        self.sink.prepare()

        roots = [
            (OperationKind.MUTATION, self.schema.mutation_type),
            (OperationKind.QUERY, self.schema.query_type),
            (OperationKind.SUBSCRIPTION, self.schema.subscription_type),
        ]

        operations: List[IROperation] = []
        folders: List[str] = []
        for kind, root_type in roots:
            if root_type is None:
                log.warning("No %s type found in your schema", kind.value)
                continue
            folder, generated = self._generate_root(root_type)
            operations.extend(generated)
            folders.append(folder)

        self._write_index(None, "package_index.py.j2", {"folders": folders})
        return operations

    def _generate_root(self, root_type: GraphQLObjectType) -> tuple[str, List[IROperation]]:
        """Generate every root field of one operation type."""
        kind = operation_kind(root_type.name)
        if kind is None:
            folder = root_type.name.lower()
            log.warning(
                "Root type %s does not match query, mutation or subscription; using %r",
                root_type.name, folder,
            )
        else:
            folder = kind.folder

        operations = []
        for field_name, field in root_type.fields.items():
            if not self.options.include_deprecated_fields and field.deprecation_reason is not None:
                continue
            if not self.hooks.should_generate(folder, field_name):
                log.debug("Skipping %s.%s", root_type.name, field_name)
                continue

            operation = self.builder.build(root_type, field_name)
            filename = operation.filename(self.options.file_extension)
            content = self.hooks.run_post_hooks(filename, operation.document)
            self.sink.write_document(folder, field_name, self.options.file_extension, content)
            log.debug("Generated %s/%s", folder, filename)
            operations.append(operation)

        entries = [
            {"identifier": safe_identifier(op.name), "filename": op.filename(self.options.file_extension)}
            for op in operations
        ]
        self._write_index(folder, "operations_index.py.j2", {"folder": folder, "entries": entries})
        log.info("Generated %d %s", len(operations), folder)
        return folder, operations

    def _write_index(self, folder: Optional[str], template_name: str, context: Dict[str, Any]):
        """Render an index template, validate it and hand it to the sink."""
        template = self.env.get_template(template_name)
        content = template.render(context)

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            output_path = f"{folder}/{INDEX_FILENAME}" if folder else INDEX_FILENAME
            raise ValueError(
                f"Generated invalid Python for {output_path}: {e}\n"
                f"Template: {template_name}"
            )

        self.sink.write_index(folder, content)
