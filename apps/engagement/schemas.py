"""
Like / saved-post schemas for API.
"""

from datetime import datetime
from uuid import UUID
from ninja import Schema
from pydantic import Field, ConfigDict

from apps.blog.schemas import PostOut


class PostRefIn(Schema):
    postId: UUID


class LikeToggleOut(Schema):
    liked: bool
    likeCount: int


class SaveToggleOut(Schema):
    saved: bool
    saveCount: int


class SavedPostOut(Schema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    postId: UUID = Field(validation_alias="post_id")
    post: PostOut
    createdAt: datetime = Field(validation_alias="created_at")
