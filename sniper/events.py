# sniper/events.py
"""
Domain event log for Recipe Sniper.

Every recipe and shopping-list mutation records one event, both as an
EventRow in the database and as a line in the JSONL file at EVENT_LOG_FILE.
Recording an event can fail (database down, disk full) without affecting the
mutation that triggered it: log_event() swallows and debug-logs its own errors.

Event names:
- recipe_added, recipe_deleted
- shopping_list_created, shopping_list_updated, shopping_list_deleted
- recipes_added_to_list
- shopping_list_exported (sent by the Streamlit detail page)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from api.config import EventConfig
from .db import db_log_event

logger = logging.getLogger(__name__)

# JSONL file with one event per line
EVENT_LOG_FILE = EventConfig.get_log_file()


def _write_to_file(record: Dict[str, Any]) -> None:
    """Append one record as a JSON line; I/O errors are only debug-logged."""
    try:
        log_file = Path(EVENT_LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception as exc:
        logger.debug("Failed to write event to file: %s", exc)


def log_event(
    event: str,
    session_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Record one event in the events table and in the JSONL file.

    Args:
        event: Event name (see module docstring)
        session_id: Streamlit session id for frontend events, None for API events
        payload: JSON-serializable details; None is stored as {}

    The file line is {"ts", "event", "session_id", "payload"} and is written
    even when the database insert fails.
    """
    payload = payload or {}

    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "session_id": session_id,
        "payload": payload,
    }

    try:
        db_log_event(event_type=event, session_id=session_id, payload=payload)
    except Exception as exc:
        logger.debug("db_log_event failed (event=%s): %s", event, exc)

    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for common event types
# ---------------------------------------------------------------------------

def log_recipe_added(recipe_id: int, url: str, ingredient_count: int) -> None:
    """
    Log a recipe_added event.

    payload:
    {
        "recipe_id": 12,
        "url": "https://...",
        "ingredient_count": 9
    }
    """
    log_event("recipe_added", payload={
        "recipe_id": recipe_id,
        "url": url,
        "ingredient_count": ingredient_count,
    })


def log_recipe_deleted(recipe_id: int) -> None:
    """Log a recipe_deleted event."""
    log_event("recipe_deleted", payload={"recipe_id": recipe_id})


def log_shopping_list_created(list_id: int, recipe_ids: List[int], item_count: int) -> None:
    """
    Log a shopping_list_created event.

    payload:
    {
        "list_id": 3,
        "recipe_ids": [1, 2],
        "item_count": 14
    }
    """
    log_event("shopping_list_created", payload={
        "list_id": list_id,
        "recipe_ids": recipe_ids,
        "item_count": item_count,
    })


def log_shopping_list_updated(list_id: int, item_count: int) -> None:
    """Log a shopping_list_updated event."""
    log_event("shopping_list_updated", payload={"list_id": list_id, "item_count": item_count})


def log_recipes_added_to_list(list_id: int, recipe_ids: List[int], item_count: int) -> None:
    """Log a recipes_added_to_list event."""
    log_event("recipes_added_to_list", payload={
        "list_id": list_id,
        "recipe_ids": recipe_ids,
        "item_count": item_count,
    })


def log_shopping_list_deleted(list_id: int) -> None:
    """Log a shopping_list_deleted event."""
    log_event("shopping_list_deleted", payload={"list_id": list_id})


def log_shopping_list_exported(
    session_id: Optional[str],
    list_id: int,
    item_count: int,
    export_format: str = "html",
) -> None:
    """
    Log a shopping_list_exported event (called from the Streamlit app).

    payload:
    {
        "list_id": 3,
        "item_count": 14,
        "format": "html" | "txt"
    }
    """
    log_event("shopping_list_exported", session_id, {
        "list_id": list_id,
        "item_count": item_count,
        "format": export_format,
    })
