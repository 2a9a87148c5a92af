"""
Admin API endpoints: user management and post moderation.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Q
from django.http import HttpRequest
from ninja import Router

from utils.auth import AuthBearer, get_current_user
from utils.errors import NotFound, ValidationError, store_operation
from utils.pagination import paginate
from utils.permissions import Action, authorize
from apps.users.models import User, UserRole
from apps.blog.models import Post
from apps.blog.schemas import MessageOut, PostsListOut, PublishToggleOut
from apps.blog import services as post_services
from apps.comments.models import Comment
from apps.engagement.models import Like
from .schemas import AdminUserOut, AdminUserUpdateIn, AdminStatsOut, UsersListOut

logger = logging.getLogger(__name__)

router = Router(auth=AuthBearer())


def with_activity(queryset):
    return queryset.annotate(
        post_count=Count("posts", distinct=True),
        comment_count=Count("comments", distinct=True),
    )


@router.get("/stats", response=AdminStatsOut)
def get_stats(request: HttpRequest):
    """Get admin dashboard stats."""
    authorize(get_current_user(request), Action.MODERATE_CONTENT)

    users_by_role = {role.value: 0 for role in UserRole}
    users_by_role.update(
        User.objects.values("role").annotate(count=Count("id")).values_list("role", "count")
    )
    published = Post.objects.filter(published=True).count()
    total_posts = Post.objects.count()

    return AdminStatsOut(
        totalUsers=sum(users_by_role.values()),
        usersByRole=users_by_role,
        totalPosts=total_posts,
        publishedPosts=published,
        draftPosts=total_posts - published,
        totalComments=Comment.objects.count(),
        totalLikes=Like.objects.count(),
    )


@router.get("/users", response=UsersListOut)
def list_users(
    request: HttpRequest,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    role: UserRole | None = None,
):
    """List all users with pagination (admin only)."""
    authorize(get_current_user(request), Action.MANAGE_USERS)

    queryset = User.objects.all()
    if search:
        queryset = queryset.filter(Q(email__icontains=search) | Q(name__icontains=search))
    if role:
        queryset = queryset.filter(role=role)

    users, pagination = paginate(with_activity(queryset).order_by("-created_at"), page, limit)
    return {"users": users, "pagination": pagination}


@router.get("/users/{user_id}", response=AdminUserOut)
def get_user(request: HttpRequest, user_id: UUID):
    """Get user details (admin only)."""
    user = with_activity(User.objects.filter(id=user_id)).first()
    if user is None:
        raise NotFound("User not found")
    authorize(get_current_user(request), Action.MANAGE_USERS, user)
    return user


@router.patch("/users/{user_id}", response=AdminUserOut)
def update_user_role(request: HttpRequest, user_id: UUID, data: AdminUserUpdateIn):
    """Change a user's role (admin only)."""
    admin = get_current_user(request)

    with store_operation("update_user_role", admin, user_id), transaction.atomic():
        user = User.objects.select_for_update().filter(id=user_id).first()
        if user is None:
            raise NotFound("User not found")
        authorize(admin, Action.MANAGE_USERS, user)

        previous = user.role
        user.role = data.role
        user.save(update_fields=["role", "updated_at"])

    logger.info(f"[Admin] {admin.id} changed role of {user_id}: {previous} -> {data.role}")
    return with_activity(User.objects.filter(id=user_id)).get()


@router.delete("/users/{user_id}", response=MessageOut)
def delete_user(request: HttpRequest, user_id: UUID):
    """Delete a user and everything they own (admin only)."""
    admin = get_current_user(request)

    with store_operation("delete_user", admin, user_id), transaction.atomic():
        user = User.objects.select_for_update().filter(id=user_id).first()
        if user is None:
            raise NotFound("User not found")
        authorize(admin, Action.MANAGE_USERS, user)
        if user.id == admin.id:
            raise ValidationError("Cannot delete yourself")
        user.delete()

    logger.info(f"[Admin] {admin.id} deleted user {user_id}")
    return {"message": "User deleted successfully"}


# ==================== POSTS ====================


@router.get("/posts", response=PostsListOut)
def list_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int = 10,
    published: bool | None = None,
    authorId: UUID | None = None,
    search: str | None = None,
):
    """List all posts, drafts included (admin only)."""
    authorize(get_current_user(request), Action.MODERATE_CONTENT)

    queryset = Post.objects.all()
    if published is not None:
        queryset = queryset.filter(published=published)
    if authorId:
        queryset = queryset.filter(author_id=authorId)
    if search:
        queryset = queryset.filter(title__icontains=search)

    posts, pagination = paginate(post_services.with_counts(queryset).order_by("-created_at"), page, limit)
    return {"posts": posts, "pagination": pagination}


@router.patch("/posts/{post_id}/publish", response=PublishToggleOut)
def toggle_publish(request: HttpRequest, post_id: UUID):
    """Publish or unpublish a post (its author or an admin)."""
    post = post_services.toggle_publish(get_current_user(request), post_id)
    message = "Post published" if post.published else "Post unpublished"
    return {"message": message, "post": post}
