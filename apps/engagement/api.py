"""
Likes and saved-posts API endpoints.
"""

from django.db.models import Prefetch, Q
from django.http import HttpRequest
from ninja import Router

from utils.auth import AuthBearer, get_current_user
from utils.permissions import is_admin
from apps.blog.models import Post
from apps.blog.services import with_counts
from .models import SavedPost
from .schemas import PostRefIn, LikeToggleOut, SaveToggleOut, SavedPostOut
from . import services

likes_router = Router(auth=AuthBearer())
saved_posts_router = Router(auth=AuthBearer())


@likes_router.post("/", response=LikeToggleOut)
def toggle_like(request: HttpRequest, data: PostRefIn):
    """Like a post, or unlike it if already liked."""
    liked, count = services.toggle_like(get_current_user(request), data.postId)
    return LikeToggleOut(liked=liked, likeCount=count)


@saved_posts_router.get("/", response=list[SavedPostOut])
def list_saved_posts(request: HttpRequest):
    """Saved posts of the current user that they may still view, most recently saved first."""
    user = get_current_user(request)
    saved = SavedPost.objects.filter(user=user)
    if not is_admin(user):
        saved = saved.filter(Q(post__published=True) | Q(post__author=user))
    saved = saved.prefetch_related(
        Prefetch("post", queryset=with_counts(Post.objects.all()))
    ).order_by("-created_at")
    return list(saved)


@saved_posts_router.post("/", response=SaveToggleOut)
def toggle_save(request: HttpRequest, data: PostRefIn):
    """Save a post, or unsave it if already saved."""
    saved, count = services.toggle_save(get_current_user(request), data.postId)
    return SaveToggleOut(saved=saved, saveCount=count)
