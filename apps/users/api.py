"""
Users API endpoints.
"""

from ninja import Router
from django.http import HttpRequest

from utils.auth import AuthBearer, get_current_user
from utils.pagination import paginate
from apps.blog.models import Post
from apps.blog.schemas import PostsListOut
from apps.blog.services import with_counts
from .schemas import UserProfileOut, UserUpdateIn

router = Router(auth=AuthBearer())


@router.get("/me", response=UserProfileOut)
def get_profile(request: HttpRequest):
    """Get current user profile."""
    user = get_current_user(request)
    return user


@router.patch("/me", response=UserProfileOut)
def update_profile(request: HttpRequest, data: UserUpdateIn):
    """Update current user profile. Only the fields sent are changed."""
    user = get_current_user(request)
    for field in ("name", "bio", "image", "location", "website"):
        if field in data.model_fields_set:
            setattr(user, field, getattr(data, field))
    user.save()
    return user


@router.get("/me/posts", response=PostsListOut)
def my_posts(request: HttpRequest, page: int = 1, limit: int = 10, published: bool | None = None):
    """Posts written by the current user, drafts included."""
    user = get_current_user(request)
    queryset = Post.objects.filter(author=user)
    if published is not None:
        queryset = queryset.filter(published=published)

    posts, pagination = paginate(with_counts(queryset).order_by("-created_at"), page, limit)
    return {"posts": posts, "pagination": pagination}
