"""
Test suite for forum endpoints.

The thread endpoint runs the real ForumService with the forum CRUD patched,
so the response shows the assembled reply tree.

System role: Verification of forum HTTP API
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

from bson import ObjectId

from cognition_api.boundary.db.CRUD.forum_crud import forum_post_crud, forum_reply_crud

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_thread_returns_nested_replies(client) -> None:
    # Arrange
    post_oid, root_oid, child_oid, late_root_oid = ObjectId(), ObjectId(), ObjectId(), ObjectId()
    post = {"_id": post_oid, "post_id": "P-1", "title": "Welcome", "uid": "u1"}
    replies = [
        {"_id": late_root_oid, "postId": "P-1", "content": "second", "parentReplyId": None, "createdAt": T0 + timedelta(hours=2)},
        {"_id": child_oid, "postId": "P-1", "content": "child", "parentReplyId": str(root_oid), "createdAt": T0 + timedelta(hours=1)},
        {"_id": root_oid, "postId": str(post_oid), "content": "first", "parentReplyId": None, "createdAt": T0},
        {"_id": ObjectId(), "postId": "P-1", "content": "orphan", "parentReplyId": "gone", "createdAt": T0},
    ]

    # Act
    with patch.object(forum_post_crud, "get_by_identifier", AsyncMock(return_value=post)), \
         patch.object(forum_reply_crud, "list_for_post", AsyncMock(return_value=replies)) as list_for_post:
        response = client.get("/forum-posts/P-1/thread")

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["post"]["_id"] == str(post_oid)
    roots = body["replies"]
    assert [node["content"] for node in roots] == ["first", "second"]
    assert roots[0]["depth"] == 0
    assert roots[0]["canReply"] is True
    assert [node["content"] for node in roots[0]["children"]] == ["child"]
    assert roots[0]["children"][0]["depth"] == 1
    assert sorted(list_for_post.await_args.args[1]) == sorted({"P-1", str(post_oid)})


def test_thread_for_missing_post_is_404(client) -> None:
    with patch.object(forum_post_crud, "get_by_identifier", AsyncMock(return_value=None)):
        response = client.get("/forum-posts/nope/thread")

    assert response.status_code == 404
    assert response.json() == {"error": "Forum post not found"}


def test_create_reply_records_author(client, as_student) -> None:
    # Arrange
    reply_oid = ObjectId()
    create = AsyncMock(side_effect=lambda db, doc: {**doc, "_id": reply_oid})

    # Act
    with patch.object(forum_reply_crud, "create", create):
        response = client.post("/forum-replies", json={"content": "Nice", "postId": "P-1"})

    # Assert
    assert response.status_code == 201
    stored = create.await_args.args[1]
    assert stored["uid"] == as_student.uid
    assert stored["userName"] == as_student.name
    assert stored["parentReplyId"] is None
    assert response.json()["_id"] == str(reply_oid)


def test_update_foreign_post_is_404(client, as_student) -> None:
    with patch.object(forum_post_crud, "update_one", AsyncMock(return_value=None)) as update_one:
        response = client.put("/forum-posts/P-1", json={"title": "Hijack", "uid": "someone"})

    assert response.status_code == 404
    assert response.json() == {"error": "Forum post not found or access denied"}
    query, update = update_one.await_args.args[1:3]
    assert {"uid": as_student.uid} in query["$and"]
    assert "uid" not in update["$set"]


def test_reply_content_is_required(client, as_student) -> None:
    response = client.post("/forum-replies", json={"postId": "P-1"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"
