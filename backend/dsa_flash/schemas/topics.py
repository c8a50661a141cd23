"""Topic schemas."""

from pydantic import Field, field_validator

from dsa_flash.schemas.base import BaseSchema, IDMixin, reject_null


class TopicBase(BaseSchema):
    """Base topic schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)  # e.g. "Data Structures"
    order: int = 0
    icon: str | None = Field(None, max_length=100)


class TopicCreate(TopicBase):
    """Schema for creating a topic."""

    pass


class TopicRead(IDMixin, TopicBase):
    """Schema for reading topic data."""

    pass


class TopicUpdate(BaseSchema):
    """Schema for updating a topic. Any field may be omitted; name, description,
    category and order may not be set to null.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1, max_length=100)
    order: int | None = None
    icon: str | None = Field(None, max_length=100)

    @field_validator("name", "description", "category", "order")
    @classmethod
    def required_fields_not_null(cls, v):
        return reject_null(v)
