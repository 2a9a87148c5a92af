"""
Likes and saved posts: one row per (post, user), toggled on and off.
"""

import uuid
from django.db import models
from apps.users.models import User
from apps.blog.models import Post


class PostAssociation(models.Model):
    """A user's presence mark on a post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class Like(PostAssociation):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="likes", db_column="postId")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="likes", db_column="userId")

    class Meta(PostAssociation.Meta):
        db_table = "likes"
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="unique_post_user_like"),
        ]

    def __str__(self) -> str:
        return f"{self.user.email} likes {self.post.slug}"


class SavedPost(PostAssociation):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="saved_by", db_column="postId")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="saved_posts", db_column="userId")

    class Meta(PostAssociation.Meta):
        db_table = "saved_posts"
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="unique_post_user_save"),
        ]

    def __str__(self) -> str:
        return f"{self.user.email} saved {self.post.slug}"
