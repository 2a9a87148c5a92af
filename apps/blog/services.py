"""
Post lifecycle: create, update, publish toggle and delete.

Each mutation follows the same order: the actor must be present, the post
must exist (row-locked inside the transaction), then the policy decides on
that same instance before it is written.
"""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet
from django.utils.html import strip_tags
from django.utils.text import Truncator, slugify

from utils.errors import ConflictError, NotFound, ValidationError, store_operation
from utils.permissions import Action, authorize, can_perform, require_actor
from .models import Category, Post, Tag, TagsOnPosts
from .schemas import PostCreateIn, PostUpdateIn

logger = logging.getLogger(__name__)


def generate_slug(title: str) -> str:
    """Lowercase, hyphenated, ASCII-only slug for a title."""
    slug = slugify(title).replace("_", "-")
    slug = "-".join(part for part in slug.split("-") if part)
    if not slug:
        raise ValidationError("Title must contain at least one letter or digit")
    return slug


def ensure_slug_available(slug: str, exclude_id=None) -> None:
    """Raise ConflictError if another post already owns ``slug``."""
    queryset = Post.objects.filter(slug=slug)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise slug_conflict(slug)


def slug_conflict(slug: str) -> ConflictError:
    return ConflictError("A post with this title already exists", details={"slug": slug})


def make_excerpt(content: str) -> str:
    """Plain-text preview of rich HTML content."""
    text = " ".join(strip_tags(content).split())
    return Truncator(text).chars(settings.EXCERPT_LENGTH)


def is_derived_excerpt(post: Post) -> bool:
    """True if the stored excerpt is empty or was generated from the content."""
    return not post.excerpt or post.excerpt == make_excerpt(post.content)


def normalize_tag_names(names: list[str]) -> list[str]:
    """Strip, drop blanks and collapse duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen[name] = None
    return list(seen)


def resolve_category(category_id) -> Category | None:
    if category_id is None:
        return None
    category = Category.objects.filter(id=category_id).first()
    if category is None:
        raise ValidationError("Category does not exist", details={"categoryId": str(category_id)})
    return category


def replace_tags(post: Post, names: list[str]) -> None:
    """Replace all tag associations of ``post``. Caller holds the transaction."""
    TagsOnPosts.objects.filter(post=post).delete()
    for name in normalize_tag_names(names):
        tag, _ = Tag.objects.get_or_create(name=name)
        TagsOnPosts.objects.create(post=post, tag=tag)


def with_counts(queryset: QuerySet) -> QuerySet:
    """Annotate posts with like/comment/save counts and prefetch relations."""
    return (
        queryset.select_related("author", "category")
        .prefetch_related("tags")
        .annotate(
            like_count=Count("likes", distinct=True),
            comment_count=Count("comments", distinct=True),
            save_count=Count("saved_by", distinct=True),
        )
    )


def load_post(post_id) -> Post:
    """Re-read a post with counts and relations for a response."""
    return with_counts(Post.objects.filter(id=post_id)).get()


def get_visible_post(actor, slug: str) -> Post:
    """Fetch a post the actor may view; drafts of others read as missing."""
    post = with_counts(Post.objects.filter(slug=slug)).first()
    if post is None or not can_perform(actor, Action.VIEW_POST, post):
        raise NotFound("Post not found")
    return post


def get_visible_post_by_id(actor, post_id) -> Post:
    post = Post.objects.filter(id=post_id).first()
    if post is None or not can_perform(actor, Action.VIEW_POST, post):
        raise NotFound("Post not found")
    return post


def create_post(actor, data: PostCreateIn) -> Post:
    require_actor(actor)
    authorize(actor, Action.CREATE_POST)

    slug = generate_slug(data.title)
    ensure_slug_available(slug)
    category = resolve_category(data.categoryId)

    with store_operation("create_post", actor, slug):
        try:
            with transaction.atomic():
                post = Post.objects.create(
                    title=data.title,
                    slug=slug,
                    content=data.content,
                    excerpt=data.excerpt or make_excerpt(data.content),
                    image_url=data.imageUrl,
                    published=data.published,
                    author=actor,
                    category=category,
                )
                if data.tags:
                    replace_tags(post, data.tags)
        except IntegrityError:
            # Lost a race for the slug
            raise slug_conflict(slug)

    logger.info(f"[Posts] {actor.id} created post {post.id} ({slug}), published={post.published}")
    return load_post(post.id)


def update_post(actor, slug: str, data: PostUpdateIn) -> Post:
    require_actor(actor)
    fields = data.model_fields_set

    with store_operation("update_post", actor, slug), transaction.atomic():
        post = Post.objects.select_for_update().filter(slug=slug).first()
        if post is None:
            raise NotFound("Post not found")
        authorize(actor, Action.UPDATE_POST, post)

        if data.title is not None:
            new_slug = generate_slug(data.title)
            if new_slug != post.slug:
                ensure_slug_available(new_slug, exclude_id=post.id)
            post.title = data.title
            post.slug = new_slug
        if data.content is not None:
            # A hand-written excerpt survives content edits
            if "excerpt" not in fields and is_derived_excerpt(post):
                post.excerpt = make_excerpt(data.content)
            post.content = data.content
        if "excerpt" in fields:
            post.excerpt = data.excerpt
        if "imageUrl" in fields:
            post.image_url = data.imageUrl
        if "categoryId" in fields:
            post.category = resolve_category(data.categoryId)
        if data.published is not None:
            post.published = data.published

        try:
            with transaction.atomic():
                post.save()
        except IntegrityError:
            # Lost a race for the slug
            raise slug_conflict(post.slug)

        if data.tags is not None:
            replace_tags(post, data.tags)

    logger.info(f"[Posts] {actor.id} updated post {post.id} ({post.slug})")
    return load_post(post.id)


def toggle_publish(actor, post_id) -> Post:
    require_actor(actor)

    with store_operation("toggle_publish", actor, post_id), transaction.atomic():
        post = Post.objects.select_for_update().filter(id=post_id).first()
        if post is None:
            raise NotFound("Post not found")
        authorize(actor, Action.TOGGLE_PUBLISH, post)

        post.published = not post.published
        post.save(update_fields=["published", "updated_at"])

    logger.info(f"[Posts] {actor.id} set post {post.id} published={post.published}")
    return load_post(post.id)


def delete_post(actor, slug: str) -> None:
    """Delete a post; comments, likes, saves and tag links go with it."""
    require_actor(actor)

    with store_operation("delete_post", actor, slug), transaction.atomic():
        post = Post.objects.select_for_update().filter(slug=slug).first()
        if post is None:
            raise NotFound("Post not found")
        authorize(actor, Action.DELETE_POST, post)

        post_id = post.id
        post.delete()

    logger.info(f"[Posts] {actor.id} deleted post {post_id} ({slug})")
