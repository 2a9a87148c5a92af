"""
Pytest configuration and fixtures.
"""

import json
import pytest
from django.test import Client

from apps.users.models import User, UserRole
from apps.blog.models import Post
from utils.auth import create_token


class APIClient:
    """Wrapper around Django test client for API testing."""

    def __init__(self):
        self.client = Client()

    def _make_request(self, method, path, data=None, headers=None):
        """Make HTTP request."""
        kwargs = {"content_type": "application/json"}

        if headers:
            kwargs.update(headers)

        if data is not None:
            kwargs["data"] = json.dumps(data)

        # Prepend /api if not present
        if not path.startswith("/api"):
            path = f"/api{path}"

        response = getattr(self.client, method.lower())(path, **kwargs)
        return APIResponse(response)

    def get(self, path, headers=None, **kwargs):
        return self._make_request("GET", path, headers=headers)

    def post(self, path, json=None, headers=None, **kwargs):
        return self._make_request("POST", path, data=json, headers=headers)

    def patch(self, path, json=None, headers=None, **kwargs):
        return self._make_request("PATCH", path, data=json, headers=headers)

    def delete(self, path, headers=None, **kwargs):
        return self._make_request("DELETE", path, headers=headers)


class APIResponse:
    """Wrapper around Django response for easier testing."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        return json.loads(self._response.content)


def make_user(email, role, name, password=None):
    user = User.objects.create(email=email, name=name, role=role)
    if password:
        user.set_password(password)
        user.save()
    return user


def bearer(user):
    """Auth headers for a user."""
    return {"HTTP_AUTHORIZATION": f"Bearer {create_token(user)}"}


@pytest.fixture
def api_client():
    """API test client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create admin user for testing."""
    return make_user("admin@test.com", UserRole.ADMIN, "Admin User", "Admin@123456")


@pytest.fixture
def editor_user(db):
    """Create editor user for testing."""
    return make_user("editor@test.com", UserRole.EDITOR, "Editor User", "Editor@123456")


@pytest.fixture
def other_editor(db):
    """A second editor who owns nothing of editor_user's."""
    return make_user("editor2@test.com", UserRole.EDITOR, "Second Editor")


@pytest.fixture
def reader_user(db):
    """Create reader user for testing."""
    return make_user("reader@test.com", UserRole.READER, "Reader User", "Reader@123456")


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def editor_headers(editor_user):
    return bearer(editor_user)


@pytest.fixture
def other_editor_headers(other_editor):
    return bearer(other_editor)


@pytest.fixture
def reader_headers(reader_user):
    return bearer(reader_user)


@pytest.fixture
def draft_post(editor_user):
    """Unpublished post owned by editor_user."""
    return Post.objects.create(
        title="Draft Thoughts",
        slug="draft-thoughts",
        content="<p>Work in progress content</p>",
        author=editor_user,
    )


@pytest.fixture
def published_post(editor_user):
    """Published post owned by editor_user."""
    return Post.objects.create(
        title="Published Story",
        slug="published-story",
        content="<p>Finished and public content</p>",
        published=True,
        author=editor_user,
    )


@pytest.fixture
def create_account(db):
    """Factory for extra users: returns (user, auth headers)."""

    def _create(email, role, name):
        user = make_user(email, role, name)
        return user, bearer(user)

    return _create
