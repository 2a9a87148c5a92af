"""
Comment schemas for API.
"""

from uuid import UUID
from ninja import Schema
from pydantic import Field

from apps.blog.schemas import CommentOut

__all__ = ["CommentOut", "CommentCreateIn", "CommentUpdateIn"]


class CommentCreateIn(Schema):
    postId: UUID
    content: str = Field(min_length=1, max_length=5000)


class CommentUpdateIn(Schema):
    content: str = Field(min_length=1, max_length=5000)
