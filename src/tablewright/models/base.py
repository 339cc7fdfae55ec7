"""Base models for tablewright."""

from pydantic import BaseModel, ConfigDict


class TablewrightBaseModel(BaseModel):
    """Base model for configuration entities (connection settings, project config)."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",  # Strict validation for config files
    )


class SchemaModel(BaseModel):
    """Base model for schema definitions.

    Schema objects are created once at definition time and never mutated,
    so they are frozen.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
        frozen=True,
    )
