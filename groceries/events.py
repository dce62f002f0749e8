# groceries/events.py
"""
Event logging for the meal planner backend.

Responsibilities:
- Provide a single log_event(...) function that appends a JSONL record to the
  events log file and never raises (analytics are strictly non-blocking).

- Provide small helper functions for grocery list event types:
  - log_grocery_meals_added(...)
  - log_grocery_meal_removed(...)
  - log_custom_item_changed(...)
  - log_grocery_list_cleared(...)
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# JSONL file with one event per line
EVENT_LOG_FILE = Path(os.getenv("EVENT_LOG_FILE", "events.log"))


def _write_to_file(record: Dict[str, Any]) -> None:
    """
    Append a single JSON record to the events log as JSONL.
    Never raise exceptions.
    """
    try:
        path = Path(EVENT_LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except Exception as exc:
        # Last-resort: log at debug level, never raise.
        logger.debug("Failed to write event to %s: %s", EVENT_LOG_FILE, exc)


def log_event(
    event: str,
    user_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Core event logger.

    Builds a record with keys ts, event, user_id, payload and appends it to
    EVENT_LOG_FILE. Never raises.
    """
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "user_id": user_id,
        "payload": payload or {},
    }
    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for grocery list event types
# ---------------------------------------------------------------------------

def log_grocery_meals_added(
    user_id: str,
    meal_plan_item_ids: List[str],
    added_count: int,
) -> None:
    """
    Log a grocery_meals_added event.

    payload:
    {
        "meal_plan_item_ids": ["...", ...],
        "requested_count": 3,
        "added_count": 2
    }
    """
    payload = {
        "meal_plan_item_ids": meal_plan_item_ids,
        "requested_count": len(meal_plan_item_ids),
        "added_count": added_count,
    }
    log_event("grocery_meals_added", user_id, payload)


def log_grocery_meal_removed(user_id: str, meal_plan_item_id: str, removed: bool) -> None:
    log_event(
        "grocery_meal_removed",
        user_id,
        {"meal_plan_item_id": meal_plan_item_id, "removed": removed},
    )


def log_custom_item_changed(
    user_id: str,
    action: str,
    item_id: str,
    fields: Optional[List[str]] = None,
) -> None:
    """
    Log a custom_item_changed event.

    Args:
        action: "added", "updated" or "deleted"
        fields: Updated field names (for "updated" only)
    """
    payload: Dict[str, Any] = {"action": action, "item_id": item_id}
    if fields:
        payload["fields"] = fields
    log_event("custom_item_changed", user_id, payload)


def log_grocery_list_cleared(user_id: str) -> None:
    log_event("grocery_list_cleared", user_id, {})
