"""Core modules for GraphQL query generation."""

from .generator import QueryGenerator
from .hooks import (
    AddHeaderHook,
    FieldFilterHook,
    FilterFieldsHook,
    HookRunner,
    PostGenerateHook,
)
from .ir import (
    ArgumentTable,
    IROperation,
    IRVariable,
    OperationKind,
    TraversalContext,
)
from .options import GeneratorOptions
from .parser import SchemaParseError, SchemaParser
from .query_builder import ContractViolation, QueryBuilder, operation_kind
from .writer import DocumentSink, FileSystemSink, MemorySink, UnsafeOutputDirError

__all__ = [
    # Hooks
    "FieldFilterHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterFieldsHook",
    "HookRunner",
    # IR types
    "ArgumentTable",
    "IROperation",
    "IRVariable",
    "OperationKind",
    "TraversalContext",
    # Options
    "GeneratorOptions",
    # Parser
    "SchemaParseError",
    "SchemaParser",
    # Query Builder
    "ContractViolation",
    "QueryBuilder",
    "operation_kind",
    # Sinks
    "DocumentSink",
    "FileSystemSink",
    "MemorySink",
    "UnsafeOutputDirError",
    # Generator
    "QueryGenerator",
]
