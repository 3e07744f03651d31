"""Generation options shared by the query builder, generator and CLI."""

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator


class GeneratorOptions(BaseModel):
    """Configuration for query document generation.

    Example:
        options = GeneratorOptions(depth_limit=5, include_deprecated_fields=True)
    """

    model_config = ConfigDict(frozen=True)

    # Maximum selection depth; guarantees termination on cyclic schemas
    depth_limit: PositiveInt = 100
    include_deprecated_fields: bool = False
    # Re-expand parent-to-field edges already expanded on the same path
    include_cross_references: bool = False
    file_extension: str = "gql"
    assume_valid: bool = False

    @field_validator("file_extension")
    @classmethod
    def _strip_extension(cls, value: str) -> str:
        value = value.strip().lstrip(".")
        if not value:
            raise ValueError("file_extension must not be empty")
        return value
