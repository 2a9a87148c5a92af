"""
Admin schemas for API.
"""

from datetime import datetime
from uuid import UUID
from ninja import Schema
from pydantic import Field, ConfigDict

from apps.users.models import UserRole
from apps.blog.schemas import PaginationOut


class AdminUserOut(Schema):
    """Admin user output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    email: str
    name: str | None = None
    role: str
    image: str | None = None
    postCount: int = Field(validation_alias="post_count", default=0)
    commentCount: int = Field(validation_alias="comment_count", default=0)
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class AdminUserUpdateIn(Schema):
    role: UserRole


class UsersListOut(Schema):
    """Paginated users list response."""

    users: list[AdminUserOut]
    pagination: PaginationOut


class AdminStatsOut(Schema):
    """Admin dashboard stats - camelCase for frontend."""

    totalUsers: int
    usersByRole: dict[str, int]
    totalPosts: int
    publishedPosts: int
    draftPosts: int
    totalComments: int
    totalLikes: int
