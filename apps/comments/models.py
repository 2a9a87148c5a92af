"""
Comment model.
"""

import uuid
from django.db import models
from apps.users.models import User
from apps.blog.models import Post


class Comment(models.Model):
    """Comment on a post. Editable by its author or an admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.TextField()
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="comments", db_column="userId")
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments", db_column="postId")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "comments"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.user.email} on {self.post.slug}"
