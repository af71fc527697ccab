"""Local key-value cache used when the API cannot be reached.

Values are JSON documents kept in memory and, when a path is given, mirrored
to a single JSON file. Writes are best effort: a failed write is logged and
the in-memory copy stays authoritative for the rest of the process.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalKeys:
    PROFILE = "askiep_profile_v2"
    ANALYSES = "askiep_analyses_v2"
    DOCUMENTS = "askiep_documents_v2"
    COMPLIANCE = "askiep_compliance_v2"
    PROGRESS = "askiep_progress_v2"
    COMMS = "askiep_comms_v2"
    BEHAVIOR = "askiep_behavior_v2"
    LETTERS = "askiep_letters_v2"


LOCAL_ID_PREFIX = "local-"


def new_local_id() -> str:
    return f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _same_child(item: Any, child_id: Any) -> bool:
    return isinstance(item, dict) and str(item.get("child_id")) == str(child_id)


class LocalStore:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else None
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if self.path is None or not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as exc:
            logger.warning("Local store unreadable, starting empty: %s", exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _flush(self) -> None:
        if self.path is None:
            return
        try:
            content = json.dumps(self._data, indent=2, sort_keys=True, default=str)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Local store write failed for %s: %s", self.path, exc)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        self._flush()

    def list(self, key: str) -> list[dict[str, Any]]:
        value = self.get(key, [])
        return value if isinstance(value, list) else []

    def for_child(self, key: str, child_id: Any) -> list[dict[str, Any]]:
        """Cached records for one child, in stored (newest first) order."""
        return [item for item in self.list(key) if _same_child(item, child_id)]

    def replace_for_child(self, key: str, child_id: Any, items: list[dict[str, Any]]) -> None:
        """Swap one child's cached records for a fresh server copy."""
        others = [item for item in self.list(key) if not _same_child(item, child_id)]
        self.set(key, list(items) + others)

    def prepend(self, key: str, item: dict[str, Any]) -> dict[str, Any]:
        self.set(key, [item] + self.list(key))
        return item

    def add(
        self, key: str, item: dict[str, Any], *, stamp_fields: tuple[str, ...] = ()
    ) -> dict[str, Any]:
        """Store a record that only exists locally.

        The record gets a ``local-`` id, a ``created_at`` stamp and
        ``local_only=True``. Fields named in ``stamp_fields`` (``last_edited``)
        get the same instant.
        """
        now = now_iso()
        record = {
            **item,
            "id": new_local_id(),
            "created_at": now,
            "local_only": True,
        }
        for field in stamp_fields:
            record[field] = now
        return self.prepend(key, record)

    def upsert(self, key: str, item: dict[str, Any]) -> dict[str, Any]:
        """Replace the record with the same id, or prepend it."""
        items = self.list(key)
        for index, existing in enumerate(items):
            if isinstance(existing, dict) and existing.get("id") == item.get("id"):
                items[index] = item
                self.set(key, items)
                return item
        return self.prepend(key, item)
