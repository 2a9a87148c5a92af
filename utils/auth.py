"""
JWT Authentication utilities for Django Ninja.

The token only identifies the user; the role is always read from the
database so a role change takes effect on the next request.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.users.models import User


class Anonymous:
    """Marker returned by OptionalAuthBearer when no valid token is present."""

    def __bool__(self) -> bool:
        # Django Ninja only accepts truthy auth results
        return True

    def __repr__(self) -> str:
        return "<Anonymous>"


ANONYMOUS = Anonymous()


def user_from_token(token: str) -> User | None:
    """Resolve a bearer token to its user, or None if invalid."""
    payload = verify_token(token)
    if not payload:
        return None
    user_id = payload.get("userId")
    if not user_id:
        return None
    try:
        return User.objects.filter(id=user_id).first()
    except DjangoValidationError:
        return None


class AuthBearer(HttpBearer):
    """JWT Bearer token authentication."""

    def authenticate(self, request: HttpRequest, token: str) -> User | None:
        user = user_from_token(token)
        if user:
            request.auth_user = user
        return user


class OptionalAuthBearer(AuthBearer):
    """Optional JWT authentication - anonymous requests pass through."""

    def __call__(self, request: HttpRequest) -> Any:
        user = super().__call__(request)
        if not user:
            request.auth_user = None
            return ANONYMOUS
        return user


def get_current_user(request: HttpRequest) -> User | None:
    """Get the acting user from request, None for anonymous."""
    user = getattr(request, "auth_user", None)
    if user is None and isinstance(getattr(request, "auth", None), User):
        user = request.auth
    return user


def create_token(user: User) -> str:
    """Create JWT token for user."""
    payload = {
        "userId": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRE_HOURS),
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict[str, Any] | None:
    """Verify JWT token and return payload."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.InvalidTokenError:
        return None
