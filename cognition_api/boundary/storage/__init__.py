"""Local file storage for uploaded avatars."""

from cognition_api.boundary.storage.avatar_store import AvatarStore

__all__ = ["AvatarStore"]
