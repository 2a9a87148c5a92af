"""
Django Ninja API configuration.
"""

import logging
from typing import Any

from ninja import NinjaAPI
from ninja.renderers import JSONRenderer
from ninja.errors import AuthenticationError, ValidationError, HttpError
from django.http import HttpRequest, HttpResponse
from pydantic import ValidationError as PydanticValidationError

from utils.auth import get_current_user
from utils.errors import AppError

logger = logging.getLogger(__name__)


class SuccessWrapperRenderer(JSONRenderer):
    """Wrap all responses in {success: true, data: ...} format for frontend compatibility."""

    def render(self, request: HttpRequest, data: Any, *, response_status: int) -> Any:
        # Don't wrap error responses (they already have success: false)
        if isinstance(data, dict) and "success" in data:
            return super().render(request, data, response_status=response_status)

        if 200 <= response_status < 300:
            wrapped = {"success": True, "data": data}
        else:
            wrapped = {"success": False, "error": data}

        return super().render(request, wrapped, response_status=response_status)


api = NinjaAPI(
    title="Inkwell API",
    version="1.0.0",
    description="Multi-author blogging API",
    renderer=SuccessWrapperRenderer(),
)


def error_response(request: HttpRequest, status: int, message: str, details: Any = None) -> HttpResponse:
    body: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return api.create_response(request, body, status=status)


def field_errors(errors: list[dict]) -> list[dict]:
    """Field errors with their context rendered as plain strings."""
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(error)
    return cleaned


@api.exception_handler(ValidationError)
def validation_errors(request: HttpRequest, exc: ValidationError) -> HttpResponse:
    return error_response(request, 400, "Validation failed", field_errors(exc.errors))


@api.exception_handler(PydanticValidationError)
def pydantic_validation_errors(request: HttpRequest, exc: PydanticValidationError) -> HttpResponse:
    return error_response(
        request, 400, "Validation failed", exc.errors(include_url=False, include_context=False)
    )


@api.exception_handler(AuthenticationError)
def authentication_errors(request: HttpRequest, exc: AuthenticationError) -> HttpResponse:
    return error_response(request, 401, "Authentication required")


@api.exception_handler(AppError)
def app_errors(request: HttpRequest, exc: AppError) -> HttpResponse:
    return error_response(request, exc.status_code, str(exc), exc.details)


@api.exception_handler(HttpError)
def http_error_handler(request: HttpRequest, exc: HttpError) -> HttpResponse:
    return error_response(request, exc.status_code, str(exc))


@api.exception_handler(Exception)
def generic_error_handler(request: HttpRequest, exc: Exception) -> HttpResponse:
    user = get_current_user(request)
    logger.exception(
        f"[API] Unhandled error on {request.method} {request.path}: actor={getattr(user, 'id', None)}"
    )
    return error_response(request, 500, "Internal server error")


# Health check
@api.get("/health")
def health_check(request: HttpRequest) -> dict:
    return {"status": "ok", "version": "1.0.0"}


# Import and register routers
from apps.auth.api import router as auth_router
from apps.users.api import router as users_router
from apps.blog.api import router as posts_router, tags_router, categories_router
from apps.comments.api import router as comments_router
from apps.engagement.api import likes_router, saved_posts_router
from apps.admin.api import router as admin_router

api.add_router("/auth", auth_router, tags=["Auth"])
api.add_router("/users", users_router, tags=["Users"])
api.add_router("/posts", posts_router, tags=["Posts"])
api.add_router("/tags", tags_router, tags=["Tags"])
api.add_router("/categories", categories_router, tags=["Categories"])
api.add_router("/comments", comments_router, tags=["Comments"])
api.add_router("/likes", likes_router, tags=["Likes"])
api.add_router("/saved-posts", saved_posts_router, tags=["Saved Posts"])
api.add_router("/admin", admin_router, tags=["Admin"])
