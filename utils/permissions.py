"""
Authorization policy for blog content.

``evaluate`` is a pure function of (actor, action, resource): it never
touches the database, so callers load the resource once, decide on that
instance and then write the same instance. ``actor`` is anything with
``id`` and ``role`` attributes (normally a ``User``), or ``None`` for an
anonymous request.
"""

from enum import Enum
from typing import Any

from apps.users.models import UserRole
from utils.errors import AuthenticationRequired, AuthorizationDenied


class Action(str, Enum):
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    TOGGLE_PUBLISH = "toggle_publish"
    VIEW_POST = "view_post"
    CREATE_COMMENT = "create_comment"
    UPDATE_COMMENT = "update_comment"
    DELETE_COMMENT = "delete_comment"
    LIKE = "like"
    SAVE = "save"
    MANAGE_USERS = "manage_users"
    MANAGE_CATEGORIES = "manage_categories"
    MODERATE_CONTENT = "moderate_content"


class Decision(str, Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


ROLE_RANK = {
    UserRole.READER.value: 0,
    UserRole.EDITOR.value: 1,
    UserRole.ADMIN.value: 2,
}


def has_role(actor: Any, minimum: UserRole) -> bool:
    """True if the actor's role is at least ``minimum``."""
    if actor is None:
        return False
    return ROLE_RANK.get(str(actor.role), -1) >= ROLE_RANK[str(minimum)]


def is_admin(actor: Any) -> bool:
    return actor is not None and actor.role == UserRole.ADMIN


def owns(actor: Any, resource: Any, owner_field: str) -> bool:
    if actor is None or resource is None:
        return False
    return getattr(resource, owner_field) == actor.id


def _owner_or_admin(owner_field: str):
    def rule(actor, resource) -> bool:
        return owns(actor, resource, owner_field) or is_admin(actor)

    return rule


def _any_authenticated(actor, resource) -> bool:
    return True


def _admin_only(actor, resource) -> bool:
    return is_admin(actor)


def _can_author(actor, resource) -> bool:
    return has_role(actor, UserRole.EDITOR)


def _can_view_post(actor, resource) -> bool:
    return resource.published or owns(actor, resource, "author_id") or is_admin(actor)


_RULES = {
    Action.CREATE_POST: _can_author,
    Action.UPDATE_POST: _owner_or_admin("author_id"),
    Action.DELETE_POST: _owner_or_admin("author_id"),
    Action.TOGGLE_PUBLISH: _owner_or_admin("author_id"),
    Action.VIEW_POST: _can_view_post,
    Action.CREATE_COMMENT: _any_authenticated,
    Action.UPDATE_COMMENT: _owner_or_admin("user_id"),
    Action.DELETE_COMMENT: _owner_or_admin("user_id"),
    Action.LIKE: _any_authenticated,
    Action.SAVE: _any_authenticated,
    Action.MANAGE_USERS: _admin_only,
    Action.MANAGE_CATEGORIES: _admin_only,
    Action.MODERATE_CONTENT: _admin_only,
}

# Actions an anonymous actor may attempt; the rule still decides.
_ANONYMOUS_ACTIONS = {Action.VIEW_POST}


def evaluate(actor: Any, action: Action, resource: Any = None) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``resource``."""
    action = Action(action)
    if actor is None and action not in _ANONYMOUS_ACTIONS:
        return Decision.UNAUTHENTICATED

    if _RULES[action](actor, resource):
        return Decision.ALLOW
    if actor is None:
        return Decision.UNAUTHENTICATED
    return Decision.FORBIDDEN


def can_perform(actor: Any, action: Action, resource: Any = None) -> bool:
    return evaluate(actor, action, resource) is Decision.ALLOW


def require_actor(actor: Any) -> Any:
    """Fail with AuthenticationRequired before any resource lookup happens."""
    if actor is None:
        raise AuthenticationRequired()
    return actor


def authorize(actor: Any, action: Action, resource: Any = None) -> None:
    """Raise the error matching a non-ALLOW decision."""
    decision = evaluate(actor, action, resource)
    if decision is Decision.UNAUTHENTICATED:
        raise AuthenticationRequired()
    if decision is Decision.FORBIDDEN:
        raise AuthorizationDenied(f"Not allowed to {Action(action).value.replace('_', ' ')}")
