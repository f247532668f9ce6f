from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------

def now_iso() -> str:
    """
    Return a current UTC timestamp in ISO-8601 format.
    """
    return datetime.now(timezone.utc).isoformat()


class AnnotationIdGenerator:
    """
    Creation-time ids that never collide.

    Ids are wall-clock microseconds rendered as decimal strings. Two ids
    requested within the same tick (or after the clock stepped back) get
    last + 1, so the sequence is strictly increasing.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def seed(self, existing_ids: Iterable[str]) -> None:
        """Resume above the largest numeric id already in use."""
        for raw in existing_ids:
            try:
                value = int(raw)
            except (TypeError, ValueError):
                continue
            self._last = max(self._last, value)

    def next_id(self) -> str:
        with self._lock:
            candidate = self._clock() // 1000
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


# -------------------------------------------------------------------------
# Per-dashboard annotation
# -------------------------------------------------------------------------

@dataclass
class Annotation:
    """
    A user-authored note attached to one dashboard.

    - id: unique, increasing with creation time
    - dashboard_id: the dashboard tab this note belongs to
    - text: saved text
    - is_editing: True while the note is open in the editor
    - draft_text: editor contents; equals text whenever is_editing is False
    - created_at: ISO8601 timestamp (UTC)
    """

    id: str
    dashboard_id: str
    text: str
    is_editing: bool = False
    draft_text: str = ""
    created_at: str = field(default_factory=now_iso)

    @classmethod
    def create(cls, *, annotation_id: str, dashboard_id: str, text: str) -> "Annotation":
        return cls(
            id=annotation_id,
            dashboard_id=dashboard_id,
            text=text,
            is_editing=False,
            draft_text=text,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "dashboard_id": self.dashboard_id,
            "text": self.text,
            "is_editing": self.is_editing,
            "draft_text": self.draft_text,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Annotation":
        text = str(data.get("text", ""))
        is_editing = bool(data.get("is_editing", False))
        draft = data.get("draft_text")
        # Restored notes that are not being edited must mirror their text
        if not is_editing or draft is None:
            draft = text
        return cls(
            id=str(data["id"]),
            dashboard_id=str(data["dashboard_id"]),
            text=text,
            is_editing=is_editing,
            draft_text=str(draft),
            created_at=data.get("created_at") or now_iso(),
        )


def annotation_or_none(data: Optional[Dict[str, Any]]) -> Optional[Annotation]:
    """Lenient variant of Annotation.from_dict for restoring persisted state."""
    if not isinstance(data, dict):
        return None
    try:
        return Annotation.from_dict(data)
    except (KeyError, TypeError, ValueError):
        return None
