"""
Tests for likes and saved posts.
"""

import pytest

from apps.engagement.models import Like, SavedPost


@pytest.mark.django_db
class TestLikes:
    def test_like_toggles(self, api_client, published_post, reader_headers):
        body = {"postId": str(published_post.id)}

        first = api_client.post("/likes/", json=body, headers=reader_headers)
        assert first.status_code == 200
        assert first.json()["data"] == {"liked": True, "likeCount": 1}

        second = api_client.post("/likes/", json=body, headers=reader_headers)
        assert second.json()["data"] == {"liked": False, "likeCount": 0}
        assert not Like.objects.exists()

    def test_counts_across_users(self, api_client, published_post, reader_headers, editor_headers):
        body = {"postId": str(published_post.id)}
        api_client.post("/likes/", json=body, headers=reader_headers)
        response = api_client.post("/likes/", json=body, headers=editor_headers)
        assert response.json()["data"] == {"liked": True, "likeCount": 2}

        detail = api_client.get("/posts/published-story").json()["data"]
        assert detail["likeCount"] == 2

    def test_anonymous_cannot_like(self, api_client, published_post):
        response = api_client.post("/likes/", json={"postId": str(published_post.id)})
        assert response.status_code == 401

    def test_like_missing_post(self, api_client, reader_headers):
        response = api_client.post(
            "/likes/", json={"postId": "00000000-0000-0000-0000-000000000000"}, headers=reader_headers
        )
        assert response.status_code == 404

    def test_like_hidden_draft(self, api_client, draft_post, reader_headers):
        response = api_client.post("/likes/", json={"postId": str(draft_post.id)}, headers=reader_headers)
        assert response.status_code == 404


@pytest.mark.django_db
class TestSavedPosts:
    def test_save_is_independent_of_like(self, api_client, published_post, reader_headers):
        body = {"postId": str(published_post.id)}
        api_client.post("/likes/", json=body, headers=reader_headers)

        response = api_client.post("/saved-posts/", json=body, headers=reader_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"saved": True, "saveCount": 1}
        assert Like.objects.count() == 1

        response = api_client.post("/saved-posts/", json=body, headers=reader_headers)
        assert response.json()["data"] == {"saved": False, "saveCount": 0}
        assert Like.objects.count() == 1

    def test_list_saved_posts(self, api_client, published_post, reader_user, reader_headers, editor_user):
        SavedPost.objects.create(post=published_post, user=reader_user)
        SavedPost.objects.create(post=published_post, user=editor_user)

        response = api_client.get("/saved-posts/", headers=reader_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["postId"] == str(published_post.id)
        assert data[0]["post"]["slug"] == "published-story"

    def test_list_requires_auth(self, api_client):
        assert api_client.get("/saved-posts/").status_code == 401


@pytest.mark.django_db
class TestMarksOnUnpublishedPosts:
    """Marks left on a post that went back to draft."""

    def test_saved_draft_is_not_listed(self, api_client, published_post, reader_headers):
        api_client.post("/saved-posts/", json={"postId": str(published_post.id)}, headers=reader_headers)
        published_post.published = False
        published_post.save()

        response = api_client.get("/saved-posts/", headers=reader_headers)
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_author_still_sees_own_saved_draft(self, api_client, published_post, editor_user, editor_headers):
        SavedPost.objects.create(post=published_post, user=editor_user)
        published_post.published = False
        published_post.save()

        data = api_client.get("/saved-posts/", headers=editor_headers).json()["data"]
        assert [s["post"]["slug"] for s in data] == ["published-story"]

    def test_can_unsave_after_unpublish(self, api_client, published_post, reader_headers):
        body = {"postId": str(published_post.id)}
        api_client.post("/saved-posts/", json=body, headers=reader_headers)
        published_post.published = False
        published_post.save()

        response = api_client.post("/saved-posts/", json=body, headers=reader_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"saved": False, "saveCount": 0}
        assert not SavedPost.objects.exists()

    def test_can_unlike_after_unpublish(self, api_client, published_post, reader_headers):
        body = {"postId": str(published_post.id)}
        api_client.post("/likes/", json=body, headers=reader_headers)
        published_post.published = False
        published_post.save()

        response = api_client.post("/likes/", json=body, headers=reader_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"liked": False, "likeCount": 0}

        # Re-liking the draft is refused
        response = api_client.post("/likes/", json=body, headers=reader_headers)
        assert response.status_code == 404
        assert not Like.objects.exists()


@pytest.mark.django_db
class TestConcurrentToggle:
    def test_lost_insert_race_reports_active(self, api_client, published_post, reader_headers, monkeypatch):
        """Another request inserts the like between our lookup and our insert."""
        real_filter = Like.objects.filter

        class ConcurrentInsert:
            def __init__(self, lookup):
                self.lookup = lookup

            def delete(self):
                Like.objects.create(**self.lookup)
                return 0, {}

        def filter_with_race(*args, **kwargs):
            if "user" in kwargs:
                return ConcurrentInsert(kwargs)
            return real_filter(*args, **kwargs)

        monkeypatch.setattr(Like.objects, "filter", filter_with_race)

        response = api_client.post("/likes/", json={"postId": str(published_post.id)}, headers=reader_headers)
        assert response.status_code == 200
        assert response.json()["data"] == {"liked": True, "likeCount": 1}

        monkeypatch.undo()
        assert Like.objects.count() == 1
