"""End-to-end tests for the comment endpoints."""

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from chemwiki.config import Settings
from chemwiki.domain.error import StaleRecordError
from chemwiki.domain.model import Comment
from chemwiki.domain.repository import (
    ArticleRepository,
    CommentRepository,
    UserRepository,
)
from chemwiki.domain.service import JWTService
from chemwiki.domain.value import UserId, UserRole
from chemwiki.interface.api.app import create_app
from tests.conftest import make_article, make_user
from tests.di import build_test_container


ALICE = UserId(uuid4())
BOB = UserId(uuid4())
ADMIN = UserId(uuid4())


async def _seed(container):
    article_repo = await container.get(ArticleRepository)
    user_repo = await container.get(UserRepository)
    await article_repo.save(make_article())
    await user_repo.save(make_user(ALICE, "alice"))
    await user_repo.save(make_user(ADMIN, "moderator", UserRole.ADMIN))


@pytest.fixture
def container():
    """Seeded in-memory container shared by the app under test."""
    test_container = build_test_container()
    asyncio.run(_seed(test_container))
    return test_container


@pytest.fixture
def client(container):
    """Create test client over the seeded container."""
    return TestClient(create_app(container))


def auth(user_id: UserId, role: UserRole = UserRole.USER) -> dict[str, str]:
    token = JWTService(Settings().auth).create_token(str(user_id), role)
    return {"Authorization": f"Bearer {token}"}


def post_comment(client, content="Sodium is 140", user_id=ALICE) -> dict:
    response = client.post(
        "/articles/sodium/comments", json={"content": content}, headers=auth(user_id)
    )
    assert response.status_code == 201
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCommentsEndpoints:
    """End-to-end tests for the public and authenticated comment routes."""

    def test_empty_thread(self, client):
        # Act
        response = client.get("/articles/sodium/comments")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["comments"] == []
        assert data["total"] == 0
        assert data["article_slug"] == "sodium"

    def test_create_requires_authentication(self, client):
        # Act
        response = client.post("/articles/sodium/comments", json={"content": "Hi"})

        # Assert
        assert response.status_code == 401

    def test_invalid_token_is_rejected(self, client):
        # Act
        response = client.post(
            "/articles/sodium/comments",
            json={"content": "Hi"},
            headers={"Authorization": "Bearer nonsense"},
        )

        # Assert
        assert response.status_code == 401

    def test_cookie_token_is_accepted(self, client):
        # Arrange
        token = JWTService(Settings().auth).create_token(str(ALICE))
        client.cookies.set("auth_token", token)

        # Act
        response = client.post("/articles/sodium/comments", json={"content": "Hi"})

        # Assert
        assert response.status_code == 201

    def test_create_reply_and_list(self, client):
        # Arrange
        root = post_comment(client, "What raises <Na>?")

        # Act
        reply = client.post(
            f"/comments/{root['comment_id']}/replies",
            json={"content": "Dehydration"},
            headers=auth(BOB),
        )
        listing = client.get("/articles/sodium/comments")

        # Assert
        assert root["content"] == "What raises &lt;Na&gt;?"
        assert root["author_name"] == "alice"
        assert reply.status_code == 201
        data = listing.json()
        assert data["total"] == 2
        [node] = data["comments"]
        assert node["comment_id"] == root["comment_id"]
        assert node["reply_count"] == 1
        assert node["replies"][0]["content"] == "Dehydration"
        assert node["replies"][0]["author_name"] == "[deleted]"

    def test_blank_content_is_a_validation_error(self, client):
        # Act
        response = client.post(
            "/articles/sodium/comments", json={"content": "   "}, headers=auth(ALICE)
        )

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "validation_error",
            "message": "Comment cannot be empty",
        }

    def test_unknown_article_returns_error_body(self, client):
        # Act
        response = client.get("/articles/potassium/comments")

        # Assert
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "not_found"

    def test_malformed_comment_id_is_not_found(self, client):
        # Act
        response = client.post("/comments/xyz/upvote", headers=auth(BOB))

        # Assert
        assert response.status_code == 404

    def test_edit_by_other_user_is_forbidden(self, client):
        # Arrange
        comment = post_comment(client)

        # Act
        forbidden = client.patch(
            f"/comments/{comment['comment_id']}",
            json={"content": "Hijacked"},
            headers=auth(BOB),
        )
        edited = client.patch(
            f"/comments/{comment['comment_id']}",
            json={"content": "Sodium is 141"},
            headers=auth(ALICE),
        )

        # Assert
        assert forbidden.status_code == 403
        assert forbidden.json()["error"] == "forbidden"
        assert edited.status_code == 200
        assert edited.json()["is_edited"] is True

    def test_soft_delete_hides_leaf(self, client):
        # Arrange
        comment = post_comment(client)

        # Act
        response = client.delete(
            f"/comments/{comment['comment_id']}", headers=auth(ALICE)
        )
        listing = client.get("/articles/sodium/comments")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "deleted"
        assert listing.json()["comments"] == []

    def test_report_twice_is_rejected(self, client):
        # Arrange
        comment = post_comment(client)
        url = f"/comments/{comment['comment_id']}/report"

        # Act
        first = client.post(url, json={"reason": "Off topic"}, headers=auth(BOB))
        second = client.post(url, json={"reason": "Off topic"}, headers=auth(BOB))

        # Assert
        assert first.status_code == 200
        assert first.json()["report_count"] == 1
        assert second.status_code == 400
        assert second.json()["error"] == "already_reported"

    @pytest.mark.parametrize("body", [{}, {"content": None}])
    def test_missing_content_is_a_validation_error(self, client, body):
        # Act
        response = client.post(
            "/articles/sodium/comments", json=body, headers=auth(ALICE)
        )

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "validation_error",
            "message": "Comment is required",
        }

    def test_non_string_content_is_a_validation_error(self, client):
        # Act
        response = client.post(
            "/articles/sodium/comments", json={"content": 42}, headers=auth(ALICE)
        )

        # Assert
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "validation_error"
        assert "content" in body["message"]

    def test_missing_report_reason_is_a_validation_error(self, client):
        # Arrange
        comment = post_comment(client)

        # Act
        response = client.post(
            f"/comments/{comment['comment_id']}/report", json={}, headers=auth(BOB)
        )

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "validation_error",
            "message": "Report reason is required",
        }

    def test_unknown_sort_is_a_validation_error(self, client):
        # Act
        response = client.get("/articles/sodium/comments?sort=bogus")

        # Assert
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "validation_error"
        assert "sort" in body["message"]

    def test_reply_beyond_depth_limit_is_rejected(self, client):
        # Arrange
        parent = post_comment(client, "Depth 0")
        for depth in range(1, 5):
            response = client.post(
                f"/comments/{parent['comment_id']}/replies",
                json={"content": f"Depth {depth}"},
                headers=auth(BOB),
            )
            assert response.status_code == 201
            parent = response.json()

        # Act
        response = client.post(
            f"/comments/{parent['comment_id']}/replies",
            json={"content": "Depth 5"},
            headers=auth(BOB),
        )

        # Assert
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "depth_limit_exceeded",
            "message": "Maximum reply depth reached (5 levels)",
        }

    def test_deleted_comment_cannot_be_replied_to_or_edited(self, client):
        # Arrange
        comment = post_comment(client)
        comment_id = comment["comment_id"]
        client.delete(f"/comments/{comment_id}", headers=auth(ALICE))

        # Act
        reply = client.post(
            f"/comments/{comment_id}/replies",
            json={"content": "Too late"},
            headers=auth(BOB),
        )
        edit = client.patch(
            f"/comments/{comment_id}",
            json={"content": "Restored"},
            headers=auth(ALICE),
        )

        # Assert
        assert reply.status_code == 400
        assert reply.json()["error"] == "invalid_state"
        assert reply.json()["message"] == "Cannot reply to a deleted comment"
        assert edit.status_code == 400
        assert edit.json()["error"] == "invalid_state"
        assert edit.json()["message"] == "Cannot edit a deleted comment"


class TestVoteEndpoints:
    """End-to-end tests for voting."""

    def test_upvote_toggle_and_switch(self, client):
        # Arrange
        comment = post_comment(client)
        comment_id = comment["comment_id"]

        # Act
        up = client.post(f"/comments/{comment_id}/upvote", headers=auth(BOB))
        down = client.post(f"/comments/{comment_id}/downvote", headers=auth(BOB))
        cleared = client.delete(f"/comments/{comment_id}/vote", headers=auth(BOB))

        # Assert
        assert up.json()["score"] == 1
        assert up.json()["user_vote"] == "up"
        assert down.json()["score"] == -1
        assert down.json()["user_vote"] == "down"
        assert cleared.json()["score"] == 0
        assert cleared.json()["user_vote"] is None

    def test_listing_shows_callers_vote(self, client):
        # Arrange
        comment = post_comment(client)
        client.post(f"/comments/{comment['comment_id']}/upvote", headers=auth(BOB))

        # Act
        as_bob = client.get("/articles/sodium/comments", headers=auth(BOB))
        anonymous = client.get("/articles/sodium/comments")

        # Assert
        assert as_bob.json()["comments"][0]["user_vote"] == "up"
        assert anonymous.json()["comments"][0]["user_vote"] is None

    def test_vote_requires_authentication(self, client):
        comment = post_comment(client)

        response = client.post(f"/comments/{comment['comment_id']}/upvote")

        assert response.status_code == 401

    def test_lost_write_race_is_a_conflict(self, client, container, monkeypatch):
        # Arrange
        comment = post_comment(client)
        comment_repo = asyncio.run(container.get(CommentRepository))

        async def always_stale(updated: Comment) -> Comment:
            raise StaleRecordError("Comment", str(updated.id), updated.version)

        monkeypatch.setattr(comment_repo, "save", always_stale)

        # Act
        response = client.post(
            f"/comments/{comment['comment_id']}/upvote", headers=auth(BOB)
        )

        # Assert
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "conflict"


class TestAdminEndpoints:
    """End-to-end tests for moderation."""

    def test_non_admin_is_forbidden(self, client):
        # Act
        response = client.get("/admin/comments", headers=auth(BOB))

        # Assert
        assert response.status_code == 403

    def test_reject_approve_and_purge(self, client):
        # Arrange
        comment = post_comment(client)
        comment_id = comment["comment_id"]
        admin = auth(ADMIN, UserRole.ADMIN)

        # Act
        rejected = client.put(f"/admin/comments/{comment_id}/reject", headers=admin)
        spam_queue = client.get("/admin/comments?status=spam", headers=admin)
        approved = client.put(f"/admin/comments/{comment_id}/approve", headers=admin)
        purged = client.delete(f"/admin/comments/{comment_id}", headers=admin)
        listing = client.get("/articles/sodium/comments")

        # Assert
        assert rejected.json()["status"] == "spam"
        assert [c["comment_id"] for c in spam_queue.json()["comments"]] == [comment_id]
        assert approved.json()["status"] == "approved"
        assert purged.status_code == 200
        assert purged.json()["removed"] == 1
        assert listing.json()["total"] == 0

    def test_purge_missing_comment(self, client):
        response = client.delete(
            f"/admin/comments/{uuid4()}", headers=auth(ADMIN, UserRole.ADMIN)
        )

        assert response.status_code == 404
