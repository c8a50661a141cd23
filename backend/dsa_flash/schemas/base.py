"""Base schema configuration."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class IDMixin(BaseModel):
    """Mixin for the string identifier.

    Document stores report the identifier as ``_id``; both spellings are read.
    """

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))


class MessageResponse(BaseSchema):
    """Plain acknowledgement body."""

    message: str


def reject_null(v):
    """Partial updates may omit a required field but not null it."""
    if v is None:
        raise ValueError("may not be null")
    return v
