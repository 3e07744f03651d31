"""Generate GraphQL query documents for every root field of a schema."""

__version__ = "0.1.0"
