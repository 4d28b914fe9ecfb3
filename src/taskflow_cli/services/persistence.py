"""Best-effort JSON persistence of whole collections in key-value storage.

Reads never raise: an absent, unreadable or malformed value is reported as
``None`` so callers can fall back to their empty default. Writes never raise
either: failures are logged and reported through the return value, leaving
the in-memory state as the source of truth.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from taskflow_cli.repositories.repository import KeyValueStorage

logger = logging.getLogger(__name__)


def load_json_list(storage: KeyValueStorage, key: str) -> list[Any] | None:
    """Load a JSON array stored under ``key``."""
    try:
        raw = storage.get(key)
    except Exception as e:
        logger.warning("Failed to read %s from storage: %s", key, e)
        return None

    if raw is None:
        return None

    try:
        value = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Discarding corrupt value for %s: %s", key, e)
        return None

    if not isinstance(value, list):
        logger.warning(
            "Discarding value for %s: expected a list, got %s", key, type(value).__name__
        )
        return None
    return value


def save_json_list(storage: KeyValueStorage, key: str, items: list[Any]) -> bool:
    """Serialize ``items`` as a JSON array under ``key``."""
    try:
        payload = json.dumps(items, ensure_ascii=False).encode("utf-8")
        ok = storage.set(key, payload)
    except Exception as e:
        logger.error("Failed to persist %s: %s", key, e)
        return False

    if not ok:
        logger.error("Storage rejected write for %s", key)
    return bool(ok)
