"""Pydantic schemas for book entities."""

from datetime import UTC, datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class BookBase(BaseModel):
    """Base schema for book data.

    Serialized with camelCase keys (``publishedDate``); snake_case keys are
    accepted on input as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Annotated[str, Field(max_length=500, description="Book title")]
    author: Annotated[str, Field(max_length=500, description="Book author")]
    isbn: Optional[str] = Field(default=None, max_length=50, description="ISBN, stored as given")
    published_date: Optional[datetime] = Field(default=None, description="Publication date (ISO-8601)")

    @field_validator("title", "author")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    @field_validator("published_date")
    @classmethod
    def normalize_published_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Stored without a zone; aware values are converted to UTC first.
        if v is not None and v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class BookCreate(BookBase):
    """Schema for creating a new book."""

    pass


class BookUpdate(BookBase):
    """Schema for replacing a book's mutable fields.

    All four fields are overwritten; omitted optional fields become null.
    An ``id`` in the payload is ignored.
    """

    pass


class BookRead(BookBase):
    """Schema for reading book data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
