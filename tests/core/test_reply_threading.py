"""
Test suite for forum reply threading.

System role: Verification of reply tree construction
"""

from datetime import datetime, timedelta, timezone

from cognition_api.core.reply_threading import build_reply_tree, can_reply

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def reply(node_id: str, parent: str | None = None, minutes: int | None = 0, **fields) -> dict:
    document = {"_id": node_id, "parentReplyId": parent, "content": node_id, **fields}
    if minutes is not None:
        document["createdAt"] = T0 + timedelta(minutes=minutes)
    return document


def ids(nodes: list[dict]) -> list[str]:
    return [node["_id"] for node in nodes]


class TestBuildReplyTree:
    """Test suite for build_reply_tree()."""

    def test_empty_list_gives_empty_forest(self) -> None:
        assert build_reply_tree([]) == []

    def test_roots_and_children_are_sorted_by_created_at(self) -> None:
        # Arrange
        replies = [
            reply("b", minutes=5),
            reply("a", minutes=1),
            reply("a2", parent="a", minutes=9),
            reply("a1", parent="a", minutes=3),
        ]

        # Act
        tree = build_reply_tree(replies)

        # Assert
        assert ids(tree) == ["a", "b"]
        assert ids(tree[0]["children"]) == ["a1", "a2"]
        assert tree[1]["children"] == []

    def test_depth_and_can_reply_annotations(self) -> None:
        replies = [
            reply("r"),
            reply("c", parent="r", minutes=1),
            reply("g", parent="c", minutes=2),
            reply("gg", parent="g", minutes=3),
        ]

        root = build_reply_tree(replies)[0]
        child = root["children"][0]
        grandchild = child["children"][0]
        great = grandchild["children"][0]

        assert [root["depth"], child["depth"], grandchild["depth"], great["depth"]] == [0, 1, 2, 3]
        assert root["canReply"] is True
        assert child["canReply"] is True
        assert grandchild["canReply"] is False
        # Structure is not capped even though replying stops at depth 2
        assert great["canReply"] is False

    def test_orphan_replies_are_omitted(self) -> None:
        replies = [reply("r"), reply("orphan", parent="missing", minutes=1)]

        tree = build_reply_tree(replies)

        assert ids(tree) == ["r"]
        assert tree[0]["children"] == []

    def test_missing_timestamps_sort_first_and_ties_keep_input_order(self) -> None:
        replies = [
            reply("r"),
            reply("x", parent="r", minutes=1),
            reply("y", parent="r", minutes=1),
            reply("n", parent="r", minutes=None),
        ]

        children = build_reply_tree(replies)[0]["children"]

        assert ids(children) == ["n", "x", "y"]

    def test_child_may_reference_parent_by_reply_id(self) -> None:
        replies = [reply("r", reply_id="R-1"), reply("c", parent="R-1", minutes=1)]

        tree = build_reply_tree(replies)

        assert ids(tree[0]["children"]) == ["c"]

    def test_iso_string_timestamps_are_compared_as_datetimes(self) -> None:
        replies = [
            {"_id": "late", "createdAt": "2024-05-02T08:00:00Z"},
            {"_id": "early", "createdAt": "2024-05-01T23:00:00+00:00"},
        ]

        assert ids(build_reply_tree(replies)) == ["early", "late"]

    def test_input_documents_are_not_mutated(self) -> None:
        original = reply("r")
        build_reply_tree([original])

        assert "children" not in original
        assert "depth" not in original


def test_can_reply_threshold() -> None:
    assert can_reply(0)
    assert can_reply(1)
    assert not can_reply(2)
