"""
Like / save toggles.

A toggle flips presence of the (post, user) row: delete it if it exists,
create it otherwise. Removing an existing mark needs no view check, so a
mark on a post that was unpublished afterwards can still be cleared. The
unique constraint on (post, user) keeps concurrent toggles from producing
duplicates.
"""

import logging

from django.db import IntegrityError, transaction

from utils.errors import store_operation
from utils.permissions import Action, authorize, require_actor
from apps.blog.services import get_visible_post_by_id
from .models import Like, SavedPost

logger = logging.getLogger(__name__)


def toggle(model, action: Action, actor, post_id) -> tuple[bool, int]:
    """Flip the actor's mark on a post. Returns (active, count for the post)."""
    require_actor(actor)
    authorize(actor, action)

    with store_operation(action.value, actor, post_id), transaction.atomic():
        deleted, _ = model.objects.filter(post_id=post_id, user=actor).delete()
        active = not deleted
        if active:
            post = get_visible_post_by_id(actor, post_id)
            authorize(actor, action, post)
            try:
                with transaction.atomic():
                    model.objects.create(post=post, user=actor)
            except IntegrityError:
                # A concurrent toggle inserted the same row first
                pass
        count = model.objects.filter(post_id=post_id).count()

    logger.info(f"[{model.__name__}] {actor.id} post={post_id} active={active}")
    return active, count


def toggle_like(actor, post_id) -> tuple[bool, int]:
    return toggle(Like, Action.LIKE, actor, post_id)


def toggle_save(actor, post_id) -> tuple[bool, int]:
    return toggle(SavedPost, Action.SAVE, actor, post_id)
