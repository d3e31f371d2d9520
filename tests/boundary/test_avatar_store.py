"""
Test suite for avatar file storage.

System role: Verification of profile picture persistence
"""

import re

from cognition_api.boundary.storage.avatar_store import AvatarStore


def test_save_writes_file_and_returns_public_path(tmp_path) -> None:
    # Arrange
    store = AvatarStore(tmp_path / "uploads")

    # Act
    public_path = store.save("me.png", b"\x89PNG")

    # Assert
    match = re.fullmatch(r"/uploads/(\d+)-me\.png", public_path)
    assert match is not None
    stored = tmp_path / "uploads" / public_path.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG"


def test_stored_name_strips_directories_and_odd_characters() -> None:
    name = AvatarStore.stored_name("../../etc/pass wd?.jpg")

    assert "/" not in name
    assert name.endswith("-pass_wd_.jpg")


def test_stored_name_defaults_when_missing() -> None:
    assert AvatarStore.stored_name(None).endswith("-avatar")
