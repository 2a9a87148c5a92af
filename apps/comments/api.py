"""
Comments API endpoints.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.http import HttpRequest
from ninja import Router

from utils.auth import AuthBearer, OptionalAuthBearer, get_current_user
from utils.errors import NotFound, ValidationError, store_operation
from utils.permissions import Action, authorize, require_actor
from apps.blog.schemas import MessageOut
from apps.blog.services import get_visible_post_by_id
from .models import Comment
from .schemas import CommentOut, CommentCreateIn, CommentUpdateIn

logger = logging.getLogger(__name__)

router = Router()


@router.get("/", response=list[CommentOut], auth=OptionalAuthBearer())
def list_comments(request: HttpRequest, postId: UUID | None = None):
    """List comments for a post, newest first."""
    if postId is None:
        raise ValidationError("postId is required")
    post = get_visible_post_by_id(get_current_user(request), postId)
    return list(Comment.objects.filter(post=post).select_related("user").order_by("-created_at"))


@router.post("/", response={201: CommentOut}, auth=AuthBearer())
def create_comment(request: HttpRequest, data: CommentCreateIn):
    """Comment on a post (any signed-in user)."""
    user = require_actor(get_current_user(request))
    post = get_visible_post_by_id(user, data.postId)
    authorize(user, Action.CREATE_COMMENT, post)

    with store_operation("create_comment", user, post.id):
        comment = Comment.objects.create(content=data.content, user=user, post=post)

    logger.info(f"[Comments] {user.id} commented {comment.id} on post {post.id}")
    return 201, comment


@router.patch("/{comment_id}", response=CommentOut, auth=AuthBearer())
def update_comment(request: HttpRequest, comment_id: UUID, data: CommentUpdateIn):
    """Edit a comment (its author or an admin)."""
    user = require_actor(get_current_user(request))

    with store_operation("update_comment", user, comment_id), transaction.atomic():
        comment = Comment.objects.select_for_update().filter(id=comment_id).first()
        if comment is None:
            raise NotFound("Comment not found")
        authorize(user, Action.UPDATE_COMMENT, comment)

        comment.content = data.content
        comment.save(update_fields=["content", "updated_at"])

    logger.info(f"[Comments] {user.id} updated comment {comment.id}")
    return Comment.objects.select_related("user").get(id=comment.id)


@router.delete("/{comment_id}", response=MessageOut, auth=AuthBearer())
def delete_comment(request: HttpRequest, comment_id: UUID):
    """Delete a comment (its author or an admin)."""
    user = require_actor(get_current_user(request))

    with store_operation("delete_comment", user, comment_id), transaction.atomic():
        comment = Comment.objects.select_for_update().filter(id=comment_id).first()
        if comment is None:
            raise NotFound("Comment not found")
        authorize(user, Action.DELETE_COMMENT, comment)
        comment.delete()

    logger.info(f"[Comments] {user.id} deleted comment {comment_id}")
    return {"message": "Comment deleted successfully"}
