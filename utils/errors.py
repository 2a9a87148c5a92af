"""
Application error taxonomy.

Every error is an ``HttpError`` so Django Ninja maps it straight onto a
status code; ``core.api`` renders them into the ``{success: false}`` envelope.
"""

import logging
from contextlib import contextmanager
from typing import Any

from django.db import DatabaseError
from ninja.errors import HttpError

logger = logging.getLogger(__name__)


class AppError(HttpError):
    """Base class for errors surfaced to API clients."""

    status = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(self.status, message or self.default_message)
        self.details = details


class ValidationError(AppError):
    status = 400
    default_message = "Validation failed"


class AuthenticationRequired(AppError):
    status = 401
    default_message = "Authentication required"


class AuthorizationDenied(AppError):
    status = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status = 404
    default_message = "Not found"


class ConflictError(AppError):
    status = 409
    default_message = "Resource already exists"


class InternalError(AppError):
    status = 500
    default_message = "Internal server error"


@contextmanager
def store_operation(action: str, actor: Any = None, resource_id: Any = None):
    """Turn unexpected store failures into an opaque InternalError.

    The failure is logged with the action, actor id and resource id; the
    client only sees "Internal server error".
    """
    try:
        yield
    except DatabaseError as exc:
        actor_id = getattr(actor, "id", None)
        logger.exception(
            f"[Store] {action} failed: actor={actor_id} resource={resource_id} error={exc}"
        )
        raise InternalError() from exc
