"""
Blog content models: posts, categories and tags.
"""

import uuid
from django.db import models
from apps.users.models import User


class Category(models.Model):
    """Post category. A post has at most one."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Tag(models.Model):
    """Tag, created on first use by a post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        db_table = "tags"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Post(models.Model):
    """Blog post. ``published`` is the whole lifecycle: draft or published."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    content = models.TextField()
    excerpt = models.TextField(null=True, blank=True)
    image_url = models.CharField(max_length=500, null=True, blank=True, db_column="imageUrl")
    published = models.BooleanField(default=False)
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name="posts", db_column="authorId")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posts",
        db_column="categoryId",
    )
    tags = models.ManyToManyField(Tag, through="TagsOnPosts", related_name="posts")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "posts"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class TagsOnPosts(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="tag_links", db_column="postId")
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name="post_links", db_column="tagId")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        db_table = "tags_on_posts"
        constraints = [
            models.UniqueConstraint(fields=["post", "tag"], name="unique_post_tag"),
        ]

    def __str__(self) -> str:
        return f"{self.post_id} - {self.tag_id}"
