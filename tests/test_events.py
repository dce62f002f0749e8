"""
Tests for the event logging utility.
"""

import json
from datetime import datetime, timezone
from unittest.mock import patch

from groceries.events import (
    log_custom_item_changed,
    log_event,
    log_grocery_list_cleared,
    log_grocery_meal_removed,
    log_grocery_meals_added,
)


class TestEventLogging:
    """Test event logging functionality."""

    def test_log_event_writes_valid_json(self, events_file):
        """Test that log_event writes one valid JSON line."""
        log_event("test_event", user_id="alice", payload={"key": "value", "number": 42})

        lines = events_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1

        record = json.loads(lines[0])
        assert set(record) == {"ts", "event", "user_id", "payload"}
        assert record["event"] == "test_event"
        assert record["user_id"] == "alice"
        assert record["payload"] == {"key": "value", "number": 42}

        # Timestamp is a recent ISO-8601 UTC time
        ts = datetime.fromisoformat(record["ts"])
        assert abs((datetime.now(timezone.utc) - ts).total_seconds()) < 5

    def test_log_event_handles_none_user_and_payload(self, logged_events):
        log_event("test_event", user_id=None, payload=None)
        record = logged_events()[0]
        assert record["user_id"] is None
        assert record["payload"] == {}

    def test_log_event_appends(self, logged_events):
        log_event("first", "alice")
        log_event("second", "alice")
        assert [r["event"] for r in logged_events()] == ["first", "second"]

    def test_log_event_never_raises(self, tmp_path):
        """Test that an unwritable log path is ignored."""
        with patch("groceries.events.EVENT_LOG_FILE", tmp_path):
            log_event("test_event", "alice", {"a": 1})


class TestEventHelpers:
    """Test the grocery list event helpers."""

    def test_meals_added(self, logged_events):
        log_grocery_meals_added("alice", ["a", "b", "c"], 2)
        record = logged_events()[0]
        assert record["event"] == "grocery_meals_added"
        assert record["payload"] == {
            "meal_plan_item_ids": ["a", "b", "c"],
            "requested_count": 3,
            "added_count": 2,
        }

    def test_meal_removed(self, logged_events):
        log_grocery_meal_removed("alice", "a", True)
        assert logged_events()[0]["payload"] == {"meal_plan_item_id": "a", "removed": True}

    def test_custom_item_changed(self, logged_events):
        log_custom_item_changed("alice", "added", "i1")
        log_custom_item_changed("alice", "updated", "i1", ["checked"])
        added, updated = logged_events()
        assert added["payload"] == {"action": "added", "item_id": "i1"}
        assert updated["payload"]["fields"] == ["checked"]

    def test_list_cleared(self, logged_events):
        log_grocery_list_cleared("alice")
        assert logged_events()[0]["event"] == "grocery_list_cleared"
