"""
User schemas for API.
"""

from datetime import datetime
from uuid import UUID
from ninja import Schema
from pydantic import Field, ConfigDict

from apps.blog.schemas import UrlStr


class UserProfileOut(Schema):
    """User profile output - camelCase for frontend compatibility."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )

    id: UUID
    email: str
    name: str | None = None
    role: str
    bio: str | None = None
    image: str | None = None
    location: str | None = None
    website: str | None = None
    createdAt: datetime = Field(validation_alias="created_at")


class UserUpdateIn(Schema):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    bio: str | None = Field(default=None, max_length=500)
    image: UrlStr | None = None
    location: str | None = Field(default=None, max_length=255)
    website: UrlStr | None = None
