"""
Blog API endpoints: posts, tags and categories.
"""

import logging
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.http import HttpRequest
from ninja import Router

from utils.auth import AuthBearer, OptionalAuthBearer, get_current_user
from utils.errors import ConflictError
from utils.pagination import paginate
from utils.permissions import Action, authorize
from . import services
from .models import Category, Post, Tag
from .schemas import (
    CategoryCreateIn,
    CategoryOut,
    MessageOut,
    PostCreateIn,
    PostDetailOut,
    PostsListOut,
    PostUpdateIn,
    TagOut,
)

logger = logging.getLogger(__name__)

router = Router()
tags_router = Router()
categories_router = Router()


@router.get("/", response=PostsListOut)
def list_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int = 10,
    category: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    authorId: UUID | None = None,
):
    """List published posts, newest first."""
    queryset = Post.objects.filter(published=True)

    if category:
        queryset = queryset.filter(category__name=category)
    if tag:
        queryset = queryset.filter(tags__name=tag)
    if search:
        queryset = queryset.filter(Q(title__icontains=search) | Q(content__icontains=search))
    if authorId:
        queryset = queryset.filter(author_id=authorId)

    queryset = services.with_counts(queryset.distinct()).order_by("-created_at")
    posts, pagination = paginate(queryset, page, limit)
    return {"posts": posts, "pagination": pagination}


@router.post("/", response={201: PostDetailOut}, auth=AuthBearer())
def create_post(request: HttpRequest, data: PostCreateIn):
    """Create a new post (editor or admin)."""
    post = services.create_post(get_current_user(request), data)
    return 201, post


@router.get("/{slug}", response=PostDetailOut, auth=OptionalAuthBearer())
def get_post(request: HttpRequest, slug: str):
    """Get a post by slug. Drafts are visible to their author and admins only."""
    return services.get_visible_post(get_current_user(request), slug)


@router.patch("/{slug}", response=PostDetailOut, auth=AuthBearer())
def update_post(request: HttpRequest, slug: str, data: PostUpdateIn):
    """Update a post (author or admin)."""
    return services.update_post(get_current_user(request), slug, data)


@router.delete("/{slug}", response=MessageOut, auth=AuthBearer())
def delete_post(request: HttpRequest, slug: str):
    """Delete a post (author or admin)."""
    services.delete_post(get_current_user(request), slug)
    return {"message": "Post deleted successfully"}


@tags_router.get("/", response=list[TagOut])
def list_tags(request: HttpRequest):
    """List all tags."""
    return list(Tag.objects.order_by("name"))


@categories_router.get("/", response=list[CategoryOut])
def list_categories(request: HttpRequest):
    """List all categories."""
    return list(Category.objects.order_by("name"))


@categories_router.post("/", response={201: CategoryOut}, auth=AuthBearer())
def create_category(request: HttpRequest, data: CategoryCreateIn):
    """Create a category (admin only)."""
    user = get_current_user(request)
    authorize(user, Action.MANAGE_CATEGORIES)

    name = data.name.strip()
    try:
        with transaction.atomic():
            category = Category.objects.create(name=name, description=data.description)
    except IntegrityError:
        raise ConflictError("Category already exists", details={"name": name})

    logger.info(f"[Categories] {user.id} created category {name}")
    return 201, category
