"""
Forum reply threading.

Rebuilds the reply forest from the flat list stored in the database. A reply
without a parent reference is a root; every other reply hangs under the reply
whose identifier matches its parent reference. Siblings are ordered by
creation time at every level.

Dependencies: None
System role: Forum presentation logic
"""

from datetime import datetime
from typing import Any

from cognition_api.core.timestamps import as_aware_datetime

MAX_REPLY_DEPTH = 2
PARENT_FIELD = "parentReplyId"


def _identifiers(reply: dict[str, Any]) -> list[str]:
    """Every identifier a child may use as its parent reference."""
    values = {str(reply[key]) for key in ("_id", "reply_id") if reply.get(key)}
    return sorted(values)


def _created_at(reply: dict[str, Any]) -> datetime:
    return as_aware_datetime(reply.get("createdAt"))


def can_reply(depth: int) -> bool:
    """Whether the UI offers a reply action at this depth."""
    return depth < MAX_REPLY_DEPTH


def build_reply_tree(replies: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Organise flat replies into a forest.

    Each node is a copy of the reply with "depth", "canReply" and "children"
    added. Replies whose parent is absent from the list are unreachable and
    omitted, as are replies caught in a parent cycle.

    Args:
        replies: Flat reply documents

    Returns:
        list[dict]: Root nodes ordered by ascending createdAt
    """
    position = {id(reply): index for index, reply in enumerate(replies)}
    roots: list[dict[str, Any]] = []
    children_by_parent: dict[str, list[dict[str, Any]]] = {}

    for reply in replies:
        parent = reply.get(PARENT_FIELD)
        if not parent:
            roots.append(reply)
        else:
            children_by_parent.setdefault(str(parent), []).append(reply)

    def attach(reply: dict[str, Any], depth: int, path: frozenset[int]) -> dict[str, Any]:
        path = path | {id(reply)}
        matched = [
            child
            for identifier in _identifiers(reply)
            for child in children_by_parent.get(identifier, [])
            if id(child) not in path
        ]
        children = sorted(matched, key=lambda child: (_created_at(child), position[id(child)]))
        return {
            **reply,
            "depth": depth,
            "canReply": can_reply(depth),
            "children": [attach(child, depth + 1, path) for child in children],
        }

    return [attach(reply, 0, frozenset()) for reply in sorted(roots, key=_created_at)]
