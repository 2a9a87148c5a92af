"""
Tests for Admin API endpoints.
"""

import pytest

from apps.users.models import User, UserRole
from apps.blog.models import Post
from apps.comments.models import Comment
from apps.engagement.models import Like


@pytest.mark.django_db
class TestAdminUsersAPI:
    """Admin Users API test cases."""

    def test_list_users_as_admin(self, api_client, admin_headers, reader_user, editor_user):
        """Test listing users as admin."""
        response = api_client.get("/admin/users", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["pagination"]["total"] == 3
        assert {u["email"] for u in data["data"]["users"]} == {
            "admin@test.com",
            "reader@test.com",
            "editor@test.com",
        }

    def test_filter_users(self, api_client, admin_headers, reader_user, editor_user):
        response = api_client.get("/admin/users?role=EDITOR", headers=admin_headers)
        assert [u["email"] for u in response.json()["data"]["users"]] == ["editor@test.com"]

        response = api_client.get("/admin/users?search=reader", headers=admin_headers)
        assert [u["email"] for u in response.json()["data"]["users"]] == ["reader@test.com"]

    @pytest.mark.parametrize("headers", ["editor_headers", "reader_headers"])
    def test_list_users_forbidden_for_non_admin(self, api_client, headers, request):
        response = api_client.get("/admin/users", headers=request.getfixturevalue(headers))
        assert response.status_code == 403

    def test_list_users_requires_auth(self, api_client):
        assert api_client.get("/admin/users").status_code == 401

    def test_get_user_by_id(self, api_client, admin_headers, editor_user, published_post):
        """Test getting a specific user."""
        response = api_client.get(f"/admin/users/{editor_user.id}", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == editor_user.email
        assert data["postCount"] == 1

    def test_get_missing_user(self, api_client, admin_headers):
        response = api_client.get(
            "/admin/users/00000000-0000-0000-0000-000000000000", headers=admin_headers
        )
        assert response.status_code == 404

    def test_update_user_role(self, api_client, admin_headers, reader_user):
        """Promote a reader to editor."""
        response = api_client.patch(
            f"/admin/users/{reader_user.id}", json={"role": "EDITOR"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "EDITOR"
        reader_user.refresh_from_db()
        assert reader_user.role == UserRole.EDITOR

    def test_update_user_invalid_role(self, api_client, admin_headers, reader_user):
        response = api_client.patch(
            f"/admin/users/{reader_user.id}", json={"role": "OWNER"}, headers=admin_headers
        )
        assert response.status_code == 400

    def test_editor_cannot_change_roles(self, api_client, editor_headers, reader_user):
        response = api_client.patch(
            f"/admin/users/{reader_user.id}", json={"role": "ADMIN"}, headers=editor_headers
        )
        assert response.status_code == 403
        reader_user.refresh_from_db()
        assert reader_user.role == UserRole.READER

    def test_delete_user_removes_content(self, api_client, admin_headers, editor_user, published_post, reader_user):
        Comment.objects.create(post=published_post, user=reader_user, content="soon gone")
        Like.objects.create(post=published_post, user=reader_user)

        response = api_client.delete(f"/admin/users/{editor_user.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["message"] == "User deleted successfully"

        assert not User.objects.filter(id=editor_user.id).exists()
        assert not Post.objects.exists()
        assert not Comment.objects.exists()
        assert not Like.objects.exists()

    def test_missing_user_is_404_before_role_check(self, api_client, reader_headers):
        response = api_client.delete(
            "/admin/users/00000000-0000-0000-0000-000000000000", headers=reader_headers
        )
        assert response.status_code == 404

    def test_reader_cannot_delete_existing_user(self, api_client, reader_headers, editor_user):
        response = api_client.delete(f"/admin/users/{editor_user.id}", headers=reader_headers)
        assert response.status_code == 403
        assert User.objects.filter(id=editor_user.id).exists()

    def test_cannot_delete_self(self, api_client, admin_headers, admin_user):
        response = api_client.delete(f"/admin/users/{admin_user.id}", headers=admin_headers)
        assert response.status_code == 400
        assert User.objects.filter(id=admin_user.id).exists()


@pytest.mark.django_db
class TestAdminStatsAPI:
    def test_stats(self, api_client, admin_headers, reader_user, draft_post, published_post):
        Comment.objects.create(post=published_post, user=reader_user, content="hello")
        Like.objects.create(post=published_post, user=reader_user)

        response = api_client.get("/admin/stats", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalUsers"] == 3
        assert data["usersByRole"] == {"READER": 1, "EDITOR": 1, "ADMIN": 1}
        assert data["totalPosts"] == 2
        assert data["publishedPosts"] == 1
        assert data["draftPosts"] == 1
        assert data["totalComments"] == 1
        assert data["totalLikes"] == 1

    def test_stats_forbidden_for_editor(self, api_client, editor_headers):
        assert api_client.get("/admin/stats", headers=editor_headers).status_code == 403


@pytest.mark.django_db
class TestAdminPostsAPI:
    """Admin Posts API test cases."""

    def test_list_all_posts_including_drafts(self, api_client, admin_headers, draft_post, published_post):
        response = api_client.get("/admin/posts", headers=admin_headers)
        assert response.status_code == 200
        slugs = {p["slug"] for p in response.json()["data"]["posts"]}
        assert slugs == {"draft-thoughts", "published-story"}

        response = api_client.get("/admin/posts?published=false", headers=admin_headers)
        assert [p["slug"] for p in response.json()["data"]["posts"]] == ["draft-thoughts"]

    def test_list_posts_forbidden_for_editor(self, api_client, editor_headers):
        assert api_client.get("/admin/posts", headers=editor_headers).status_code == 403

    def test_toggle_missing_post(self, api_client, admin_headers):
        response = api_client.patch(
            "/admin/posts/00000000-0000-0000-0000-000000000000/publish", headers=admin_headers
        )
        assert response.status_code == 404


@pytest.mark.django_db
class TestPublishLifecycle:
    """Author creates a draft, a reader is refused, author publishes, admin unpublishes."""

    def test_publish_toggle_scenario(self, api_client, create_account):
        _, author = create_account("author@test.com", UserRole.EDITOR, "Author")
        _, reader = create_account("someone@test.com", UserRole.READER, "Someone")
        _, admin = create_account("boss@test.com", UserRole.ADMIN, "Boss")

        created = api_client.post(
            "/posts/",
            json={"title": "Lifecycle Post", "content": "Content for the lifecycle test"},
            headers=author,
        )
        assert created.status_code == 201
        post_id = created.json()["data"]["id"]
        assert created.json()["data"]["published"] is False

        path = f"/admin/posts/{post_id}/publish"

        refused = api_client.patch(path, headers=reader)
        assert refused.status_code == 403
        assert Post.objects.get(id=post_id).published is False

        published = api_client.patch(path, headers=author)
        assert published.status_code == 200
        assert published.json()["data"]["message"] == "Post published"
        assert published.json()["data"]["post"]["published"] is True
        assert api_client.get("/posts/lifecycle-post").status_code == 200

        unpublished = api_client.patch(path, headers=admin)
        assert unpublished.status_code == 200
        assert unpublished.json()["data"]["message"] == "Post unpublished"
        assert Post.objects.get(id=post_id).published is False
        assert api_client.get("/posts/lifecycle-post").status_code == 404
