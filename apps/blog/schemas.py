"""
Blog schemas for API.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID
from ninja import Schema
from pydantic import AfterValidator, Field, ConfigDict, HttpUrl

URL_MAX_LENGTH = 500


def _url_to_str(value: HttpUrl) -> str:
    url = str(value)
    if len(url) > URL_MAX_LENGTH:
        raise ValueError(f"URL must be at most {URL_MAX_LENGTH} characters")
    return url


# http(s) URL stored as plain text
UrlStr = Annotated[HttpUrl, AfterValidator(_url_to_str)]


class AuthorOut(Schema):
    """Author info embedded in posts and comments."""

    id: UUID
    name: str | None = None
    image: str | None = None


class CategoryOut(Schema):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None


class CategoryCreateIn(Schema):
    name: str = Field(min_length=2, max_length=100)
    description: str | None = None


class TagOut(Schema):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class CommentOut(Schema):
    """Comment output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    content: str
    postId: UUID = Field(validation_alias="post_id")
    userId: UUID = Field(validation_alias="user_id")
    user: AuthorOut | None = None
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class PostOut(Schema):
    """Post list output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    slug: str
    excerpt: str | None = None
    imageUrl: str | None = Field(validation_alias="image_url", default=None)
    published: bool
    authorId: UUID = Field(validation_alias="author_id")
    author: AuthorOut | None = None
    category: CategoryOut | None = None
    tags: list[TagOut] = []
    likeCount: int = Field(validation_alias="like_count", default=0)
    commentCount: int = Field(validation_alias="comment_count", default=0)
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class PostDetailOut(PostOut):
    """Post detail output with content and comments."""

    content: str
    saveCount: int = Field(validation_alias="save_count", default=0)
    comments: list[CommentOut] = []


class PaginationOut(Schema):
    """Pagination info."""

    page: int
    limit: int
    total: int
    totalPages: int


class PostsListOut(Schema):
    """Paginated posts list response."""

    posts: list[PostOut]
    pagination: PaginationOut


class PostCreateIn(Schema):
    """Post create input."""

    title: str = Field(min_length=5, max_length=255)
    content: str = Field(min_length=10)
    excerpt: str | None = None
    imageUrl: UrlStr | None = None
    categoryId: UUID | None = None
    tags: list[str] | None = None
    published: bool = False


class PostUpdateIn(Schema):
    """Post update input. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=5, max_length=255)
    content: str | None = Field(default=None, min_length=10)
    excerpt: str | None = None
    imageUrl: UrlStr | None = None
    categoryId: UUID | None = None
    tags: list[str] | None = None
    published: bool | None = None


class PublishToggleOut(Schema):
    message: str
    post: PostOut


class MessageOut(Schema):
    message: str
