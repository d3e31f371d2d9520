"""
Test suite for live session status and capacity rules.

System role: Verification of schedule classification
"""

from datetime import datetime, timedelta, timezone

import pytest

from cognition_api.core.live_sessions import has_started, is_full, session_status

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestSessionStatus:
    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (NOW - timedelta(minutes=5), NOW + timedelta(minutes=55), "live"),
            (NOW, NOW + timedelta(hours=1), "live"),
            (NOW + timedelta(hours=1), NOW + timedelta(hours=2), "upcoming"),
            (NOW - timedelta(hours=2), NOW - timedelta(hours=1), "completed"),
        ],
    )
    def test_classifies_against_now(self, start, end, expected) -> None:
        assert session_status(start, end, NOW) == expected

    def test_accepts_iso_strings_and_naive_dates(self) -> None:
        assert session_status("2026-03-01T13:00:00Z", "2026-03-01T14:00:00Z", NOW) == "upcoming"
        assert session_status(datetime(2026, 3, 1, 11), datetime(2026, 3, 1, 13), NOW) == "live"

    def test_missing_times_count_as_completed(self) -> None:
        assert session_status(None, None, NOW) == "completed"


def test_has_started_only_after_start() -> None:
    assert has_started(NOW - timedelta(seconds=1), NOW)
    assert not has_started(NOW + timedelta(seconds=1), NOW)


class TestIsFull:
    def test_full_at_capacity(self) -> None:
        assert is_full(10, 10)
        assert not is_full(9, 10)

    def test_default_capacity_when_unset(self) -> None:
        assert not is_full(99, None)
        assert is_full(100, None)
