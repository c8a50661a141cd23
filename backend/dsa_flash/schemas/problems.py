"""Problem schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from dsa_flash.schemas.base import BaseSchema, IDMixin, reject_null

# Mirrors db.models.Difficulty (used as a literal for API validation)
DifficultyType = Literal["Easy", "Medium", "Hard"]


def clean_tags(tags: list[str]) -> list[str]:
    """Drop blank tags. Order and duplicates are kept."""
    return [tag for tag in tags if tag]


class ProblemBase(BaseSchema):
    """Base problem schema with common fields."""

    topic_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    difficulty: DifficultyType
    leetcode_url: str | None = None
    geeksforgeeks_url: str | None = None
    solution: str = Field(..., min_length=1)
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    time_complexity: str | None = Field(None, max_length=100)  # e.g. "O(n log n)"
    space_complexity: str | None = Field(None, max_length=100)

    @field_validator("tags")
    @classmethod
    def drop_blank_tags(cls, v: list[str]) -> list[str]:
        return clean_tags(v)


class ProblemCreate(ProblemBase):
    """Schema for creating a problem.

    Clients may send the creation time they stamped locally; the server
    stamps one otherwise.
    """

    created_at: datetime | None = None


class ProblemRead(IDMixin, ProblemBase):
    """Schema for reading problem data."""

    created_at: datetime


class ProblemUpdate(BaseSchema):
    """Schema for updating a problem. created_at is immutable.

    Any field may be omitted. Fields a problem cannot exist without reject an
    explicit null.
    """

    topic_id: str | None = Field(None, min_length=1)
    title: str | None = Field(None, min_length=1, max_length=255)
    difficulty: DifficultyType | None = None
    leetcode_url: str | None = None
    geeksforgeeks_url: str | None = None
    solution: str | None = Field(None, min_length=1)
    notes: str | None = None
    tags: list[str] | None = None
    time_complexity: str | None = Field(None, max_length=100)
    space_complexity: str | None = Field(None, max_length=100)

    @field_validator("topic_id", "title", "difficulty", "solution", "tags")
    @classmethod
    def required_fields_not_null(cls, v):
        return reject_null(v)

    @field_validator("tags")
    @classmethod
    def drop_blank_tags(cls, v: list[str]) -> list[str]:
        return clean_tags(v)
